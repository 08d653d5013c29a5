"""Hardened demo HTTP API: proxy-aware client addresses and input validation."""

__version__ = "0.1.0"
