from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

import uvicorn
from pydantic import ValidationError

from inventory_service.core.config import Settings
from inventory_service.main import create_app


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    # -h is the host, so help is only available as --help.
    parser = argparse.ArgumentParser(prog="inventory-service", add_help=False, description="Inventory HTTP service")
    parser.add_argument("--help", action="help", help="show this help message and exit")
    parser.add_argument("-h", "--host", required=True, help="server address")
    parser.add_argument("-p", "--port", required=True, help="server port")
    parser.add_argument("-c", "--cache", required=True, help="path to cache directory")
    return parser


def settings_from_args(argv: Sequence[str] | None = None) -> Settings:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        settings = Settings(host=args.host, port=args.port, cache_dir=args.cache)
    except ValidationError as e:
        parser.error(f"invalid configuration: {e.errors()[0].get('msg', e)}")
    return settings


def main(argv: Sequence[str] | None = None) -> int:
    settings = settings_from_args(argv)
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    settings.ensure_directories()
    app = create_app(settings)

    logger.info("Server running at http://%s:%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level)
    return 0


if __name__ == "__main__":
    sys.exit(main())
