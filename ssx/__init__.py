"""SSx: an instrument-led conversational assistant shell."""

__version__ = "0.1.0"
