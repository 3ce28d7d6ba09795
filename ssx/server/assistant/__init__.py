"""Canned intent dispatching, the instrument catalog and the per-turn controller."""
