"""Ordered pattern rules used to pick a Kai call for a drink name."""

from __future__ import annotations

import re
from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class MatchRule:
    """One positional pattern over a lower-cased call description.

    ``before``/``after`` are words that must appear somewhere before/after the drink name;
    ``anchor_start``/``anchor_end`` pin the drink name to the start/end of the description.
    A rule with ``literal`` ignores the drink and requires the description to equal it.
    """

    name: str
    before: str | None = None
    after: str | None = None
    anchor_start: bool = False
    anchor_end: bool = False
    literal: str | None = None

    def pattern(self, drink: str) -> re.Pattern[str]:
        if self.literal is not None:
            return re.compile(rf"^{re.escape(self.literal)}$", re.IGNORECASE)

        parts: list[str] = []
        if self.anchor_start:
            parts.append("^")
        if self.before:
            parts.append(re.escape(self.before) + ".*")
        parts.append(re.escape(drink.lower()))
        if self.after:
            parts.append(".*" + re.escape(self.after))
        if self.anchor_end:
            parts.append("$")
        return re.compile("".join(parts), re.IGNORECASE | re.DOTALL)

    def matches(self, description: str, drink: str) -> bool:
        return self.pattern(drink).search(description.lower()) is not None


# Most specific first: drink paired with "beverage"/"request" wording, then a bare
# mention of the drink, then catch-all call names.
CALL_RULES: tuple[MatchRule, ...] = (
    MatchRule("beverage-then-drink-at-end", before="beverage", anchor_end=True),
    MatchRule("request-then-drink-at-end", before="request", anchor_end=True),
    MatchRule("drink-at-start-then-beverage", after="beverage", anchor_start=True),
    MatchRule("drink-at-start-then-request", after="request", anchor_start=True),
    MatchRule("beverage-then-drink", before="beverage"),
    MatchRule("request-then-drink", before="request"),
    MatchRule("drink-then-beverage", after="beverage"),
    MatchRule("drink-then-request", after="request"),
    MatchRule("drink-anywhere"),
    MatchRule("drink-request", literal="drink request"),
    MatchRule("beverage-request", literal="beverage request"),
    MatchRule("service", literal="service"),
)
