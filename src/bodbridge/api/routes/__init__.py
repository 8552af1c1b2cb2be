"""Route group exports."""

from . import bod, diagnostics

__all__ = ["bod", "diagnostics"]
