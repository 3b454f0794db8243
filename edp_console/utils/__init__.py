"""Utility helpers for logging and database access."""
