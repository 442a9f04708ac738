"""Epoch converter service: timestamp conversion engine and HTTP API."""

__version__ = "1.0.0"
