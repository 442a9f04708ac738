"""Timestamp conversion endpoints."""
