"""Domain models."""

from .domain import CallDefinition, DispatchResult, OrderLine, OrderRequest, ZoneEntry

__all__ = ["CallDefinition", "ZoneEntry", "OrderLine", "OrderRequest", "DispatchResult"]
