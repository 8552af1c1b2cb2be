"""Kai call dispatch."""

from .service import build_call_payload, dispatch_call

__all__ = ["build_call_payload", "dispatch_call"]
