"""High-level orchestration of a BOD order: parse, match, dispatch."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Protocol

from ..models.domain import CallDefinition, DispatchResult, OrderRequest
from .dispatch.service import dispatch_call
from .matching.matcher import find_call
from .orders.parser import parse_order_request

logger = logging.getLogger(__name__)


class BridgeState(str, Enum):
    IDLE = "idle"
    PARSING = "parsing"
    MATCHING = "matching"
    DISPATCHING = "dispatching"
    DONE = "done"
    FAILED = "failed"


class CallDirectory(Protocol):
    def list_call_definitions(self) -> list[CallDefinition]: ...

    def create_call(self, payload: dict[str, Any]) -> Any: ...


class ZoneResolver(Protocol):
    def resolve_zone(self, location: str) -> Optional[int]: ...


@dataclass(slots=True)
class RequestContext:
    """Transport details of the inbound request, kept for error reports."""

    method: str = "POST"
    url: str = "/bod"
    client_ip: str = "unknown"
    content_length: Optional[int] = None
    media_type: Optional[str] = None


@dataclass(slots=True)
class BridgeOutcome:
    state: BridgeState
    response_text: str
    failed_stage: Optional[BridgeState] = None
    request: Optional[OrderRequest] = None
    call: Optional[CallDefinition] = None
    dispatch: Optional[DispatchResult] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.state is BridgeState.DONE


class BridgeOrchestrator:
    """Runs each inbound order through parse -> match -> dispatch."""

    def __init__(self, client: CallDirectory, zone_cache: ZoneResolver) -> None:
        self.client = client
        self.zone_cache = zone_cache

    def parse(self, body: bytes | str) -> OrderRequest:
        return parse_order_request(body, self.zone_cache.resolve_zone)

    def match(self, drink: str) -> CallDefinition:
        return find_call(drink, self.client.list_call_definitions())

    def dispatch(self, call: CallDefinition, request: OrderRequest, dry_run: bool = False) -> DispatchResult:
        return dispatch_call(call, request, self.client, dry_run=dry_run)

    def handle(self, body: bytes | str, context: RequestContext | None = None) -> BridgeOutcome:
        """Process one notification; failures are logged and reported, never raised."""
        context = context or RequestContext()
        text = body.decode("utf-8", errors="replace") if isinstance(body, bytes) else body
        logger.info(f"{context.client_ip} {context.method} {context.url}: {text}")

        state = BridgeState.PARSING
        request: OrderRequest | None = None
        call: CallDefinition | None = None
        try:
            request = self.parse(body)
            state = BridgeState.MATCHING
            call = self.match(request.drink)
            state = BridgeState.DISPATCHING
            result = self.dispatch(call, request)
        except Exception as exc:
            self._log_failure(exc, state, context, text)
            return BridgeOutcome(
                state=BridgeState.FAILED,
                failed_stage=state,
                response_text=f"Error handling request: {type(exc).__name__}",
                request=request,
                call=call,
                error=exc,
            )
        return BridgeOutcome(
            state=BridgeState.DONE,
            response_text="OK",
            request=request,
            call=call,
            dispatch=result,
        )

    def _log_failure(self, exc: Exception, stage: BridgeState, context: RequestContext, body: str) -> None:
        size = "unknown" if context.content_length is None else context.content_length
        lines = [
            f"Caught exception handling BOD request while {stage.value}: {type(exc).__name__} {exc}",
            f"Request: {context.method} {context.url}",
            f"Requestor IP: {context.client_ip}",
            f"Body: {size} bytes, media type {context.media_type}",
            body,
        ]
        logger.error("\n".join(lines), exc_info=exc)
