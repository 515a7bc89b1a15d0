"""Rookery — a chess rules engine with a minimax opponent."""

__version__ = "0.1.0"
