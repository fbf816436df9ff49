"""Local HTTP responder serving the last published snapshot.

One route, ``GET /api``, gated by the SHA-256 digest of the configured
API key.  The caller supplies the digest in the ``X-Api-Key`` header, the
``key`` query parameter, or a JSON body ``{"key": ...}``.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Callable

from aiohttp import web

from pyniu._crypto.hashing import digests_match, sha256_hex
from pyniu.client import NiuClient
from pyniu.config import NiuConfig
from pyniu.errors import describe_error
from pyniu.models.snapshot import VehicleSnapshot

_logger = logging.getLogger(__name__)

SnapshotSource = Callable[[], VehicleSnapshot | None]

SNAPSHOT_SOURCE = web.AppKey("snapshot_source", SnapshotSource)
API_KEY_DIGEST = web.AppKey("api_key_digest", str)
CLIENT = web.AppKey("client", NiuClient)


async def _read_key(request: web.Request) -> str:
    header = request.headers.get("X-Api-Key")
    if header:
        return header
    query = request.query.get("key")
    if query:
        return query
    if not request.can_read_body:
        return ""
    try:
        body = await request.json()
    except ValueError:
        return ""
    key = body.get("key") if isinstance(body, dict) else None
    return key if isinstance(key, str) else ""


async def handle_api(request: web.Request) -> web.Response:
    key = await _read_key(request)
    if not digests_match(key, request.app[API_KEY_DIGEST]):
        _logger.debug("Rejected /api request from %s", request.remote)
        return web.json_response({"error": "Unauthorized"}, status=401)

    snapshot = request.app[SNAPSHOT_SOURCE]()
    if snapshot is None:
        return web.json_response({"error": "Snapshot not available"}, status=503)
    return web.json_response(snapshot.model_dump(mode="json", by_alias=True))


def build_app(snapshot_source: SnapshotSource, api_key_digest: str) -> web.Application:
    """Build the responder around an arbitrary snapshot source."""
    app = web.Application()
    app[SNAPSHOT_SOURCE] = snapshot_source
    app[API_KEY_DIGEST] = api_key_digest
    app.router.add_get("/api", handle_api)
    return app


def create_app(config: NiuConfig) -> web.Application:
    """Build the responder and run the aggregation pipeline once at startup."""

    async def _client_ctx(app: web.Application) -> AsyncIterator[None]:
        async with NiuClient(config) as client:
            app[CLIENT] = client
            result = await client.refresh_snapshot()
            if result.error is not None:
                _logger.error(
                    "Snapshot unavailable: %s failed at %s: %s",
                    result.error.origin_function,
                    result.error.timestamp,
                    describe_error(result.error),
                )
            yield

    def _snapshot() -> VehicleSnapshot | None:
        client = app.get(CLIENT)
        return client.get_snapshot() if client is not None else None

    app = build_app(_snapshot, sha256_hex(config.api_key))
    app.cleanup_ctx.append(_client_ctx)
    return app
