"""Tick-driven territory conquest simulation."""

__version__ = "0.1.0"
