"""Data models for depman."""

from .package import Package

__all__ = ["Package"]
