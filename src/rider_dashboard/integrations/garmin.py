"""
Garmin wearable metrics client.

Fetches the five readiness inputs (Body Battery, sleep score, HRV status,
training load, recovery time) from configurable endpoints. Each endpoint's
response shape differs between Garmin products, so the value is located by
an optional dot path with sensible fallbacks.

OAuth token exchange is handled elsewhere; this client only needs a bearer
access token.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import httpx

from ..config import Settings
from ..exceptions import ConfigurationError, MetricsFetchError
from ..models.readiness import HrvStatus, WearableMetrics
from ..normalize import parse_hrv_status, to_optional_number
from ..utils.timestamps import utc_now_iso

logger = logging.getLogger(__name__)


METRIC_NAMES = ("body_battery", "sleep_score", "hrv_status", "training_load", "recovery_time")


@dataclass
class MetricEndpoint:
    """Where to fetch one metric and where its value lives in the response."""

    path: Optional[str] = None
    value_field: Optional[str] = None


@dataclass
class GarminMetricsConfig:
    base_url: str
    endpoints: Dict[str, MetricEndpoint]

    @classmethod
    def from_settings(cls, settings: Settings) -> "GarminMetricsConfig":
        if not settings.garmin_api_base_url:
            raise ConfigurationError("garmin_api_base_url")
        return cls(
            base_url=settings.garmin_api_base_url,
            endpoints={
                name: MetricEndpoint(
                    path=getattr(settings, f"garmin_{name}_path"),
                    value_field=getattr(settings, f"garmin_{name}_value_field"),
                )
                for name in METRIC_NAMES
            },
        )


def resolve_url(base_url: str, path: Optional[str], date: Optional[str] = None) -> Optional[str]:
    """
    Build the request URL for a metric path.

    Paths starting with "http" are used as-is; others are joined to
    ``base_url``. ``date`` is added as a query parameter when given.
    """
    if not path:
        return None
    if path.startswith("http"):
        url = path
    else:
        url = f"{base_url.rstrip('/')}/{path.lstrip('/')}"
    if not date:
        return url

    parts = urlsplit(url)
    query = dict(parse_qsl(parts.query))
    query["date"] = date
    return urlunsplit(parts._replace(query=urlencode(query)))


def read_dot_path(data: Any, path: Optional[str]) -> Any:
    """Follow ``a.b.c`` through nested dicts; None when any step is missing."""
    if not path:
        return None
    current = data
    for key in path.split("."):
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def extract_number(data: Any, field: Optional[str] = None) -> Optional[float]:
    """
    Locate a numeric metric value.

    Tries the configured dot path, then a bare numeric payload, then the
    ``value``, ``score`` and ``amount`` keys.
    """
    direct = to_optional_number(read_dot_path(data, field))
    if direct is not None:
        return direct
    if isinstance(data, (int, float)) and not isinstance(data, bool):
        return to_optional_number(data)
    if isinstance(data, dict):
        for key in ("value", "score", "amount"):
            parsed = to_optional_number(data.get(key))
            if parsed is not None:
                return parsed
    return None


def extract_status(data: Any, field: Optional[str] = None) -> Optional[HrvStatus]:
    """Locate the HRV status via dot path, then ``status``, ``state`` or ``value``."""
    direct = parse_hrv_status(read_dot_path(data, field))
    if direct is not None:
        return direct
    if isinstance(data, dict):
        for key in ("status", "state", "value"):
            parsed = parse_hrv_status(data.get(key))
            if parsed is not None:
                return parsed
    return None


class GarminMetricsClient:
    """
    Async client for the wearable metric endpoints.

    Pass an ``httpx.AsyncClient`` to share a connection pool (or a mock
    transport in tests); otherwise one is created lazily.
    """

    provider = "garmin"

    def __init__(
        self,
        config: GarminMetricsConfig,
        timeout: float = 30.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.config = config
        self.timeout = timeout
        self._http_client = http_client
        self._owns_client = http_client is None

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> "GarminMetricsClient":
        return cls(
            GarminMetricsConfig.from_settings(settings),
            timeout=settings.http_timeout_seconds,
            http_client=http_client,
        )

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._http_client is None or self._http_client.is_closed:
            self._http_client = httpx.AsyncClient(timeout=self.timeout)
            self._owns_client = True
        return self._http_client

    async def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_client and self._http_client is not None and not self._http_client.is_closed:
            await self._http_client.aclose()
            self._http_client = None

    async def __aenter__(self) -> "GarminMetricsClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def _fetch_metric(self, url: Optional[str], access_token: str) -> Any:
        if not url:
            return None

        client = await self._get_client()
        try:
            response = await client.get(url, headers={"Authorization": f"Bearer {access_token}"})
        except httpx.HTTPError as e:
            logger.error(f"Garmin metric request failed: {e}")
            raise MetricsFetchError(upstream_text=str(e)) from e

        if not response.is_success:
            logger.warning(f"Garmin metric request returned {response.status_code}")
            raise MetricsFetchError(
                upstream_status=response.status_code,
                upstream_text=response.text,
            )

        try:
            return response.json()
        except ValueError as e:
            logger.warning(f"Garmin metric response from {response.url.path} is not JSON")
            raise MetricsFetchError(
                upstream_status=response.status_code,
                upstream_text=response.text,
            ) from e

    async def fetch_metrics(self, access_token: str, date: Optional[str] = None) -> WearableMetrics:
        """
        Fetch all configured metrics concurrently.

        Metrics without a configured path come back as None. Any failed
        request fails the whole call.
        """
        endpoints = self.config.endpoints
        urls = [
            resolve_url(self.config.base_url, endpoints.get(name, MetricEndpoint()).path, date)
            for name in METRIC_NAMES
        ]
        payloads = dict(
            zip(
                METRIC_NAMES,
                await asyncio.gather(*(self._fetch_metric(url, access_token) for url in urls)),
            )
        )

        def field(name: str) -> Optional[str]:
            return endpoints.get(name, MetricEndpoint()).value_field

        return WearableMetrics(
            captured_at=utc_now_iso(),
            body_battery=extract_number(payloads["body_battery"], field("body_battery")),
            sleep_score=extract_number(payloads["sleep_score"], field("sleep_score")),
            hrv_status=extract_status(payloads["hrv_status"], field("hrv_status")),
            training_load=extract_number(payloads["training_load"], field("training_load")),
            recovery_time_hours=extract_number(payloads["recovery_time"], field("recovery_time")),
        )
