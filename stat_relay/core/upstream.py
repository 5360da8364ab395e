"""
UPSTREAM MODULE - Talk to the Bilibili stats API

Purpose:
    1. Build outbound URLs (nested params -> bracketed query string)
    2. Send GET / JSON POST through one scoped httpx client
    3. Decode the {code, message, ttl, data} envelope and reject non-zero codes

Data Flow:
    mid -> get() -> raw body -> decode_envelope() -> RelationStatEnvelope / UpStatEnvelope
"""

import json
import logging
from typing import Any, Mapping, Optional, Type, TypeVar

import httpx
from fastapi import Request
from pydantic import ValidationError

from stat_relay.core.config import Settings, settings
from stat_relay.core.errors import (
    UpstreamApplicationError,
    UpstreamDecodeError,
    UpstreamTransportError,
)
from stat_relay.core.query import ParamValue, append_query
from stat_relay.core.schemas import ApiStat, RelationStatEnvelope, UpStatEnvelope

logger = logging.getLogger(__name__)

RELATION_STAT_PATH = "/x/relation/stat"
UP_STAT_PATH = "/x/space/upstat"

EnvelopeT = TypeVar("EnvelopeT", bound=ApiStat)


def build_http_client(config: Settings) -> httpx.AsyncClient:
    """
    Create the outbound client.

    TLS verification lives on this client only, so turning it off never
    leaks into other connections in the process.
    """
    if not config.VERIFY_TLS:
        logger.warning("TLS certificate verification is disabled for upstream calls")

    return httpx.AsyncClient(verify=config.VERIFY_TLS, timeout=config.HTTP_TIMEOUT)


def decode_envelope(body: bytes, model: Type[EnvelopeT]) -> EnvelopeT:
    """
    Parse an upstream body into its envelope model.

    Raises:
        UpstreamDecodeError: body is not JSON or does not fit the model
        UpstreamApplicationError: envelope code is not 0
    """
    try:
        envelope = model.model_validate_json(body)
    except ValidationError as error:
        logger.error(f"Failed to decode upstream response: {error}")
        raise UpstreamDecodeError(str(error)) from error

    if envelope.code != 0:
        logger.error(f"Upstream returned code {envelope.code}: {body!r}")
        raise UpstreamApplicationError(envelope.code, envelope.message)

    return envelope


class StatsClient:
    """Thin wrapper around httpx for the two stats endpoints."""

    def __init__(self, http: httpx.AsyncClient, base_url: str):
        self.http = http
        self.base_url = base_url.rstrip("/")

    def url_for(
        self, path: str, params: Optional[Mapping[str, ParamValue]] = None
    ) -> str:
        return append_query(f"{self.base_url}{path}", params)

    async def get(
        self, path: str, params: Optional[Mapping[str, ParamValue]] = None
    ) -> bytes:
        """GET a path and return the raw body. HTTP status is not checked."""
        url = self.url_for(path, params)
        logger.info(f"GET {url}")

        try:
            response = await self.http.get(url)
        except httpx.HTTPError as error:
            logger.error(f"Upstream request failed: {url}: {error!r}")
            raise UpstreamTransportError(str(error) or repr(error)) from error

        return response.content

    async def post_json(self, path: str, payload: Any) -> bytes:
        """POST a JSON body and return the raw response body."""
        url = self.url_for(path)
        body = json.dumps(payload, ensure_ascii=False).encode("utf-8")
        logger.info(f"POST {url}")

        try:
            response = await self.http.post(
                url, content=body, headers={"Content-Type": "application/json"}
            )
        except httpx.HTTPError as error:
            logger.error(f"Upstream request failed: {url}: {error!r}")
            raise UpstreamTransportError(str(error) or repr(error)) from error

        return response.content

    async def fetch_relation_stat(self, mid: str) -> RelationStatEnvelope:
        """Follower / following counts for a user."""
        body = await self.get(RELATION_STAT_PATH, {"vmid": mid, "jsonp": "jsonp"})
        return decode_envelope(body, RelationStatEnvelope)

    async def fetch_up_stat(self, mid: str) -> UpStatEnvelope:
        """Archive / article view counts for a user."""
        body = await self.get(UP_STAT_PATH, {"mid": mid, "jsonp": "jsonp"})
        return decode_envelope(body, UpStatEnvelope)


# This is the "Bridge" that gives the routes access to the shared httpx client
async def get_stats_client(request: Request) -> StatsClient:
    return StatsClient(request.app.state.http_client, settings.STATS_API_BASE)
