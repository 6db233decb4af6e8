"""Helpers for the local League of Legends client and in-game APIs, with small threading utilities."""

__version__ = "0.1.0"