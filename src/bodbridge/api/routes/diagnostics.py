"""Diagnostic endpoints for exercising parse, match and dispatch directly.

These are for setup and troubleshooting, so failures are not swallowed: bridge errors are
reported as HTTP errors and anything unexpected propagates.
"""

from __future__ import annotations

from typing import Any, NoReturn

from fastapi import APIRouter, Depends, HTTPException, Request, status
from starlette.concurrency import run_in_threadpool

from ...errors import APIRequestError, BridgeError, UnsupportedDrinkError, UnsupportedRequestFormatError
from ...models.domain import CallDefinition, OrderRequest
from ...schemas.diagnostics import CallPayloadModel, CreateCallRequest, FindCallRequest
from ..dependencies import BridgeServices, get_services

router = APIRouter(prefix="/test", tags=["diagnostics"])

_STATUS_BY_ERROR = {
    UnsupportedRequestFormatError: status.HTTP_400_BAD_REQUEST,
    UnsupportedDrinkError: status.HTTP_404_NOT_FOUND,
    APIRequestError: status.HTTP_502_BAD_GATEWAY,
}


def _raise_http(exc: BridgeError) -> NoReturn:
    status_code = _STATUS_BY_ERROR.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
    raise HTTPException(
        status_code=status_code,
        detail={"error": type(exc).__name__, "detail": str(exc)},
    ) from exc


@router.post("/parse_request")
async def parse_request(request: Request, services: BridgeServices = Depends(get_services)) -> dict:
    body = await request.body()
    try:
        parsed = await run_in_threadpool(services.orchestrator.parse, body)
    except BridgeError as exc:
        _raise_http(exc)
    return parsed.to_dict()


def _parse_and_match(services: BridgeServices, body: bytes) -> tuple[OrderRequest, CallDefinition]:
    parsed = services.orchestrator.parse(body)
    return parsed, services.orchestrator.match(parsed.drink)


@router.post("/map_request")
async def map_request(request: Request, services: BridgeServices = Depends(get_services)) -> dict:
    body = await request.body()
    try:
        _, call = await run_in_threadpool(_parse_and_match, services, body)
    except BridgeError as exc:
        _raise_http(exc)
    return call.to_dict()


@router.post("/dispatch_dryrun", response_model=CallPayloadModel)
async def dispatch_dryrun(request: Request, services: BridgeServices = Depends(get_services)) -> dict:
    body = await request.body()
    try:
        parsed, call = await run_in_threadpool(_parse_and_match, services, body)
        result = services.orchestrator.dispatch(call, parsed, dry_run=True)
    except BridgeError as exc:
        _raise_http(exc)
    return result.payload


@router.post("/find_call")
def find_call(payload: FindCallRequest, services: BridgeServices = Depends(get_services)) -> dict:
    try:
        call = services.orchestrator.match(payload.drink)
    except BridgeError as exc:
        _raise_http(exc)
    return call.to_dict()


@router.post("/create_call")
def create_call(
    payload: CreateCallRequest | None = None,
    services: BridgeServices = Depends(get_services),
) -> Any:
    """Create a real Kai call from explicit values, bypassing drink matching."""
    payload = payload or CreateCallRequest()
    try:
        zone = payload.zone if payload.zone is not None else services.zone_cache.resolve_zone(payload.location)
        order = OrderRequest(
            drink=payload.drink,
            location=payload.location,
            zone=zone,
            description=payload.description,
        )
        call = CallDefinition(id=payload.id_call_config, description="diagnostic call")
        result = services.orchestrator.dispatch(call, order)
    except BridgeError as exc:
        _raise_http(exc)
    return result.response
