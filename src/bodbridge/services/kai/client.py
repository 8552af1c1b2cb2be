"""HTTP client for the Acres 4 Kai v3 API."""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from ...config import ApiCredentials, settings
from ...errors import APIRequestError
from ...models.domain import CallDefinition, ZoneEntry

logger = logging.getLogger(__name__)


class KaiClient:
    """Reads call configs and zones from Kai and creates calls.

    Credentials go out as HTTP basic auth so they never appear in logged URLs.
    """

    def __init__(
        self,
        credentials: ApiCredentials,
        base_url_template: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        template = base_url_template or settings.api_base_url_template
        self.base_url = template.format(sitename=credentials.sitename).rstrip("/") + "/"
        self.timeout = timeout if timeout is not None else settings.api_timeout_seconds
        self._client = httpx.Client(
            base_url=self.base_url,
            auth=(credentials.username, credentials.password),
            timeout=httpx.Timeout(self.timeout, connect=10.0),
            follow_redirects=True,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def _request(self, method: str, endpoint: str, payload: Any = None) -> Any:
        method = method.upper()
        url = f"{self.base_url}{endpoint}"
        body = json.dumps(payload) if payload is not None else None
        try:
            if body is None:
                response = self._client.request(method, endpoint)
            else:
                response = self._client.request(
                    method, endpoint, content=body, headers={"Content-Type": "application/json"}
                )
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as exc:
            raise APIRequestError(
                f"Failed API request {method} {url}: received HTTP {exc.response.status_code}.\n"
                f"Request body: {body or '(null)'}\n"
                f"Response body:\n{exc.response.text}"
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            raise APIRequestError(
                f"Failed API request {method} {url}: caught exception {type(exc).__name__} {exc}.\n"
                f"Request body: {body or '(null)'}"
            ) from exc

    def _get_list(self, endpoint: str) -> list[dict]:
        data = self._request("GET", endpoint)
        if not isinstance(data, list):
            raise APIRequestError(f"Expected a list from GET {self.base_url}{endpoint}, got {type(data).__name__}")
        return [record for record in data if isinstance(record, dict)]

    def list_call_definitions(self) -> list[CallDefinition]:
        """Fetch every configured call; fetched fresh on each call, never cached."""
        calls: list[CallDefinition] = []
        for record in self._get_list("call-config"):
            try:
                calls.append(
                    CallDefinition(id=int(record["id"]), description=str(record["description"]), raw=record)
                )
            except (KeyError, TypeError, ValueError) as exc:
                logger.warning(f"Skipping call-config record without usable id/description: {record!r} ({exc})")
        return calls

    def list_zones(self) -> list[ZoneEntry]:
        zones: list[ZoneEntry] = []
        for record in self._get_list("zone?all=true"):
            try:
                zones.append(ZoneEntry(id=int(record["id"]), description=str(record["description"])))
            except (KeyError, TypeError, ValueError) as exc:
                logger.warning(f"Skipping zone record without usable id/description: {record!r} ({exc})")
        return zones

    def create_call(self, payload: dict[str, Any]) -> Any:
        return self._request("POST", "call", payload)
