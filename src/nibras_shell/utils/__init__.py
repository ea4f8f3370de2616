"""Utility helpers for nibras-shell."""
