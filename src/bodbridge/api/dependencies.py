"""Lazily built service container shared by the routes."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass

from fastapi import Request

from ..config import ApiCredentials, Settings, load_api_credentials
from ..persistence.filesystem import ZoneFileStorage
from ..services.bridge import BridgeOrchestrator
from ..services.kai.client import KaiClient
from ..services.zones.cache import ZoneCache
from ..services.zones.dispatcher import get_zone_source

logger = logging.getLogger(__name__)

_build_lock = threading.Lock()


@dataclass(slots=True)
class BridgeServices:
    client: KaiClient
    zone_cache: ZoneCache
    orchestrator: BridgeOrchestrator


def build_services(settings: Settings, credentials: ApiCredentials | None = None) -> BridgeServices:
    credentials = credentials or load_api_credentials(settings.credentials_file)
    client = KaiClient(
        credentials,
        base_url_template=settings.api_base_url_template,
        timeout=settings.api_timeout_seconds,
    )
    zone_cache = ZoneCache(
        storage=ZoneFileStorage(settings.zonefile),
        source=get_zone_source(client, settings),
        expiration_seconds=settings.zonefile_expiration_time,
    )
    logger.info(f"Configured API user: {credentials.username} @ {credentials.sitename}")
    return BridgeServices(
        client=client,
        zone_cache=zone_cache,
        orchestrator=BridgeOrchestrator(client, zone_cache),
    )


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_services(request: Request) -> BridgeServices:
    state = request.app.state
    if state.services is None:
        with _build_lock:
            if state.services is None:
                state.services = build_services(state.settings)
    return state.services
