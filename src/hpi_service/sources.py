from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, Protocol
from urllib.parse import quote

import httpx

from hpi_service.settings import ServiceSettings

logger = logging.getLogger(__name__)

DEFAULT_FIXTURE_DIR = Path(__file__).parent / "fixtures"
DEFAULT_HPI_PATH = "/v1/hpi"

# UK marks are letters and digits only, at most 8 once spaces are removed
_VRM_RE = re.compile(r"[A-Z0-9]{1,8}")


def normalize_vrm(registration: str) -> str:
    vrm = "".join(registration.split()).upper()
    if not vrm:
        raise ValueError("Vehicle registration is required")
    if not _VRM_RE.fullmatch(vrm):
        raise ValueError(f"Invalid vehicle registration: {registration!r}")
    return vrm


class HpiDataSource(Protocol):
    async def fetch(self, registration: str) -> dict[str, Any]:
        """Return the decoded ``{success, result, error}`` envelope."""
        ...


class OneAutoHpiClient:
    """Async client for the OneAuto HPI check endpoint.

    Tries ``{endpoint}?vrm=REG`` first and falls back to ``{endpoint}/REG``
    when the query form answers 404. The endpoint is ``base_url + hpi_path``;
    without an explicit ``hpi_path`` a base URL that carries its own path
    (the older ``HPI_API_URL`` shape) is taken as the endpoint itself.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str,
        hpi_path: str | None = None,
        auth_style: str = "x-api-key",
        timeout_seconds: float = 15.0,
        retries: int = 2,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        if hpi_path is None:
            hpi_path = "" if httpx.URL(self.base_url).path.strip("/") else DEFAULT_HPI_PATH
        hpi_path = hpi_path.strip("/")
        self.endpoint = f"{self.base_url}/{hpi_path}" if hpi_path else self.base_url
        self.auth_style = auth_style.lower()
        self.timeout_seconds = timeout_seconds
        self.retries = retries
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.auth_style == "bearer":
            headers["Authorization"] = f"Bearer {self.api_key}"
        else:
            headers["X-API-Key"] = self.api_key
        return headers

    async def fetch(self, registration: str) -> dict[str, Any]:
        vrm = normalize_vrm(registration)
        url = self.endpoint
        transport = self._transport or httpx.AsyncHTTPTransport(retries=self.retries)
        try:
            async with httpx.AsyncClient(
                transport=transport, timeout=self.timeout_seconds, headers=self._headers(),
            ) as client:
                resp = await client.get(url, params={"vrm": vrm, "registration": vrm})
                if resp.status_code == 404:
                    resp = await client.get(f"{url}/{quote(vrm, safe='')}")
                resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPStatusError as exc:
            logger.warning("OneAuto HPI lookup for %s failed with HTTP %s", vrm, exc.response.status_code)
            return {"success": False, "error": f"OneAuto API error {exc.response.status_code}"}
        except httpx.HTTPError as exc:
            logger.warning("OneAuto HPI lookup for %s failed: %s", vrm, exc)
            return {"success": False, "error": str(exc) or type(exc).__name__}

        if not isinstance(data, dict):
            return {"success": False, "error": "OneAuto API returned a non-object body"}
        return data


class FixtureHpiSource:
    """Serve recorded OneAuto responses from ``<VRM>.json`` files.

    Unknown registrations get ``default.json`` re-keyed to the requested VRM.
    """

    def __init__(self, fixture_dir: str | Path | None = None) -> None:
        self.fixture_dir = Path(fixture_dir) if fixture_dir else DEFAULT_FIXTURE_DIR

    def _load(self, name: str) -> dict[str, Any] | None:
        path = self.fixture_dir / f"{name}.json"
        if not path.is_file():
            return None
        return json.loads(path.read_text(encoding="utf-8"))

    async def fetch(self, registration: str) -> dict[str, Any]:
        vrm = normalize_vrm(registration)
        data = self._load(vrm)
        if data is not None:
            return data

        data = self._load("default")
        if data is None:
            return {"success": False, "error": f"No fixture available for {vrm}"}
        result = data.get("result") or {}
        result["vehicle_registration_mark"] = vrm
        for item in result.get("cherished_data_items") or []:
            item["current_vehicle_registration_mark"] = vrm
        return data


def build_data_source(settings: ServiceSettings) -> HpiDataSource:
    if settings.oneauto_use_mock or not settings.live_provider_configured:
        logger.info("Using fixture HPI data source")
        return FixtureHpiSource(settings.hpi_fixture_dir or None)
    return OneAutoHpiClient(
        api_key=settings.oneauto_api_key,
        base_url=settings.oneauto_base_url,
        hpi_path=settings.oneauto_hpi_path if "oneauto_hpi_path" in settings.model_fields_set else None,
        auth_style=settings.oneauto_auth_style,
        timeout_seconds=settings.oneauto_timeout_seconds,
        retries=settings.oneauto_retries,
    )
