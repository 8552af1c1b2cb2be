"""Kai API access."""

from .client import KaiClient

__all__ = ["KaiClient"]
