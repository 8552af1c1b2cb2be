"""Catch-all HTTP listener that logs every request it receives.

Useful while pointing beverage-on-demand at a new host: run it in place of the bridge to see
exactly what BOD sends.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime
from typing import Any, Sequence

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from .cli import configure_logging

logger = logging.getLogger(__name__)

DEFAULT_PORT = 4567
SPY_METHODS = ["GET", "POST", "PUT", "DELETE", "PATCH"]


def format_value(value: Any, indent: int = 0) -> str:
    """Render nested mappings and lists as an indented outline."""
    pad = "    " * indent
    if isinstance(value, dict):
        if not value:
            return f"{pad}{{}}"
        width = max(len(str(key)) for key in value)
        lines = []
        for key, item in value.items():
            if isinstance(item, (dict, list)) and item:
                lines.append(f"{pad}{str(key):>{width}}:")
                lines.append(format_value(item, indent + 1))
            else:
                lines.append(f"{pad}{str(key):>{width}}: {item}")
        return "\n".join(lines)
    if isinstance(value, list):
        if not value:
            return f"{pad}[]"
        lines = []
        for index, item in enumerate(value):
            if isinstance(item, (dict, list)) and item:
                lines.append(f"{pad}{index:>3}:")
                lines.append(format_value(item, indent + 1))
            else:
                lines.append(f"{pad}{index:>3}:  {item}")
        return "\n".join(lines)
    return f"{pad}{value}"


def dump_request(request: Request, body: bytes) -> str:
    text = body.decode("utf-8", errors="replace")
    lines = [
        str(datetime.now()),
        f"{request.method} {request.url}",
        f"User agent: {request.headers.get('user-agent')}",
        f"Referrer: {request.headers.get('referer')}",
        f"IP: {request.client.host if request.client else 'unknown'}",
        f"Params: {json.dumps(dict(request.query_params))}",
        f"Body: {len(body)} bytes, media type {request.headers.get('content-type')}",
        text,
    ]
    try:
        parsed = json.loads(text) if text else None
    except ValueError:
        parsed = None
    if isinstance(parsed, (dict, list)):
        lines += ["Body dump:", format_value(parsed)]
    return "\n".join(lines)


def create_spy_app() -> FastAPI:
    app = FastAPI(title="BOD request spy")

    @app.api_route("/{path:path}", methods=SPY_METHODS, response_class=PlainTextResponse)
    async def spy(request: Request, path: str) -> str:
        body = await request.body()
        dump = dump_request(request, body)
        logger.info(dump)
        return dump

    return app


def parse_spy_port(argv: Sequence[str]) -> int:
    if not argv or not argv[0].isdigit() or int(argv[0]) <= 0:
        return DEFAULT_PORT
    return int(argv[0])


def main(argv: Sequence[str] | None = None) -> int:
    port = parse_spy_port(list(sys.argv[1:] if argv is None else argv))
    configure_logging()
    logger.info(f"Listening on: {port}")
    uvicorn.run(create_spy_app(), host="0.0.0.0", port=port, log_config=None)
    return 0


if __name__ == "__main__":
    sys.exit(main())
