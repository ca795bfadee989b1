"""Ingot: provision a local Firely Server container bundle."""

__version__ = "0.1.0"
