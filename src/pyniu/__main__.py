"""Run the pipeline once and serve the snapshot: ``python -m pyniu``.

Configuration comes from ``NIU_*`` environment variables (see
:meth:`pyniu.config.NiuConfig.from_env`).
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any

from aiohttp import web

from pyniu.config import NiuConfig
from pyniu.exceptions import NiuConfigError
from pyniu.server import create_app

_logger = logging.getLogger("pyniu")


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="pyniu",
        description="Fetch NIU vehicle telemetry once and serve it on GET /api.",
    )
    parser.add_argument("--host", help="Interface to bind (default: NIU_HOST or 0.0.0.0)")
    parser.add_argument("--port", type=int, help="Port to listen on (default: NIU_PORT or 8080)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable DEBUG logging")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    overrides: dict[str, Any] = {}
    if args.host:
        overrides["host"] = args.host
    if args.port is not None:
        overrides["port"] = args.port

    try:
        config = NiuConfig.from_env(**overrides)
    except NiuConfigError as exc:
        _logger.error("%s", exc)
        return 2
    if not config.api_key:
        _logger.error("NIU_API_KEY is not set; refusing to serve an unprotected endpoint")
        return 2

    web.run_app(create_app(config), host=config.host, port=config.port, print=None)
    return 0


if __name__ == "__main__":
    sys.exit(main())
