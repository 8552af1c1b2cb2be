"""Endpoints facing the beverage-on-demand system."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse
from starlette.concurrency import run_in_threadpool

from ...config import Settings
from ...services.bridge import RequestContext
from ..dependencies import get_services, get_settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["bod"])


@router.get("/", response_class=PlainTextResponse)
def banner(settings: Settings = Depends(get_settings)) -> str:
    return settings.banner


def _context(request: Request) -> RequestContext:
    content_length = request.headers.get("content-length")
    return RequestContext(
        method=request.method,
        url=str(request.url),
        client_ip=request.client.host if request.client else "unknown",
        content_length=int(content_length) if content_length and content_length.isdigit() else None,
        media_type=request.headers.get("content-type"),
    )


@router.post("/bod", response_class=PlainTextResponse)
async def receive_order(request: Request) -> str:
    """Create a Kai call for a BOD order. Always answers 200 with "OK" or an error summary."""
    body = await request.body()
    try:
        services = get_services(request)
    except Exception as exc:
        logger.exception(f"Bridge is not configured; dropping request from {_context(request).client_ip}")
        return f"Error handling request: {type(exc).__name__}"

    outcome = await run_in_threadpool(services.orchestrator.handle, body, _context(request))
    return outcome.response_text
