"""Select the Kai call configured for a requested drink."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence, Union

from ...errors import UnsupportedDrinkError
from ...models.domain import CallDefinition
from .rules import CALL_RULES, MatchRule

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class Found:
    call: CallDefinition
    rule: MatchRule


@dataclass(slots=True, frozen=True)
class NotFound:
    drink: str


MatchResult = Union[Found, NotFound]


def match_call(
    drink: str,
    calls: Sequence[CallDefinition],
    rules: Sequence[MatchRule] = CALL_RULES,
) -> MatchResult:
    """Return the highest-id call matched by the first rule that matches anything."""
    for rule in rules:
        pattern = rule.pattern(drink)
        matched = [call for call in calls if pattern.search(call.description.lower())]
        logger.debug(
            f"Rule {rule.name!r} for drink {drink!r} matched {[(c.id, c.description) for c in matched]}"
        )
        if matched:
            return Found(call=max(matched, key=lambda call: call.id), rule=rule)
    return NotFound(drink=drink)


def find_call(drink: str, calls: Sequence[CallDefinition]) -> CallDefinition:
    result = match_call(drink, calls)
    if isinstance(result, NotFound):
        raise UnsupportedDrinkError(f"Unable to find call for requested item: {drink}")
    logger.info(
        f"Matched drink {drink!r} to call {result.call.id} ({result.call.description!r}) via rule {result.rule.name!r}"
    )
    return result.call
