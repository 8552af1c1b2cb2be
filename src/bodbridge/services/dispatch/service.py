"""Build and send Kai call-creation requests."""

from __future__ import annotations

import logging
from typing import Any, Protocol

from ...models.domain import CallDefinition, DispatchResult, OrderRequest

logger = logging.getLogger(__name__)


class CallCreator(Protocol):
    def create_call(self, payload: dict[str, Any]) -> Any: ...


def build_call_payload(call: CallDefinition, request: OrderRequest) -> dict[str, Any]:
    return {
        "idCallConfig": call.id,
        "idZone": request.zone,
        "description": request.description,
    }


def _zone_label(request: OrderRequest) -> str:
    return "null" if request.zone is None else str(request.zone)


def dispatch_call(
    call: CallDefinition,
    request: OrderRequest,
    client: CallCreator,
    dry_run: bool = False,
) -> DispatchResult:
    payload = build_call_payload(call, request)
    logger.info(
        f"Creating call with id_call_config={call.id} ({call.description!r}) for drink {request.drink} "
        f"at location {request.location} (id_zone={_zone_label(request)})"
    )
    if dry_run:
        return DispatchResult(payload=payload, dry_run=True)

    response = client.create_call(payload)
    logger.info(
        f"Kai API accepted call with id_call_config={call.id} for drink {request.drink} "
        f"at location {request.location} (id_zone={_zone_label(request)})"
    )
    return DispatchResult(payload=payload, response=response)
