"""Chirpy: a small backend for posting short text chirps."""

__version__ = "0.1.0"
