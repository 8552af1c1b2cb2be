"""Drink-to-call matching."""

from .matcher import Found, MatchResult, NotFound, find_call, match_call
from .rules import CALL_RULES, MatchRule

__all__ = ["CALL_RULES", "MatchRule", "Found", "NotFound", "MatchResult", "match_call", "find_call"]
