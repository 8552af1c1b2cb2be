"""Inbound order parsing."""

from .parser import DESCRIPTION_PREFIX, describe_order, parse_order_request

__all__ = ["DESCRIPTION_PREFIX", "describe_order", "parse_order_request"]
