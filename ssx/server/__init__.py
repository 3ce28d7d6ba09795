"""HTTP surface for the SSx shell; the FastAPI application lives in ``ssx.server.app``."""
