"""Utility helpers for depman."""
