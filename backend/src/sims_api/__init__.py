"""SIMS HR evaluation API."""

__version__ = "2.0.0"
