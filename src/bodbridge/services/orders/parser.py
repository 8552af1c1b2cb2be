"""Turn a BOD order notification into a canonical order request."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from pydantic import ValidationError

from ...errors import UnsupportedRequestFormatError
from ...models.domain import OrderLine, OrderRequest
from ...schemas.orders import BodOrderEnvelope

logger = logging.getLogger(__name__)

DESCRIPTION_PREFIX = "Beverage request: "

ZoneResolver = Callable[[str], Optional[int]]


def _format_error(error: ValidationError) -> str:
    """Pick the message matching the first problem pydantic reports."""
    first = error.errors()[0]
    kind = first.get("type", "")
    loc = tuple(first.get("loc", ()))
    if kind == "json_invalid":
        return "Unable to parse request as JSON"
    if loc[:1] == ("cabinet",):
        return "Request did not include cabinet location"
    if loc[:2] == ("order", "cart") and len(loc) >= 4 and loc[3] == "name":
        return "Requested drink did not include name field"
    return "Unable to interpret request"


def _validate(body: bytes | str) -> BodOrderEnvelope:
    try:
        return BodOrderEnvelope.model_validate_json(body)
    except ValidationError as exc:
        message = _format_error(exc)
        logger.debug(f"Rejected BOD request: {exc}")
        raise UnsupportedRequestFormatError(message) from exc


def order_lines(envelope: BodOrderEnvelope) -> list[OrderLine]:
    # Modifiers without a name are left out of the description.
    return [
        OrderLine(
            name=item.name,
            modifiers=[modifier.name for modifier in item.modified or [] if modifier.name],
        )
        for item in envelope.order.cart
    ]


def describe_order(lines: list[OrderLine]) -> str:
    return DESCRIPTION_PREFIX + ", ".join(line.render() for line in lines)


def parse_order_request(body: bytes | str, resolve_zone: ZoneResolver) -> OrderRequest:
    """Validate a BOD notification and resolve its cabinet location to a Kai zone.

    Only the first cart item decides the drink; the description lists every item.
    """
    envelope = _validate(body)
    if not envelope.order.cart:
        raise UnsupportedRequestFormatError("No drinks included in request")

    lines = order_lines(envelope)
    location = envelope.cabinet.location
    return OrderRequest(
        drink=lines[0].name,
        location=location,
        zone=resolve_zone(location),
        description=describe_order(lines),
    )
