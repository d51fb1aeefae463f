#!/usr/bin/env python3
"""Command line entry point for the quote gallery image catalog."""

from __future__ import annotations

import argparse
import json
import time
from pathlib import Path
from typing import Any

from loguru import logger

from controllers.app_controller import CatalogController
from services.settings_service import CatalogSettings, load_settings
from utils.constants import CONFIG_FILE, DEFAULT_RANDOM_COUNT, DEFAULT_SEARCH_LIMIT, ensure_base_dirs
from utils.errors import CacheEmptyError, InvalidArgumentError
from utils.logging_config import configure_logging

EXIT_OK = 0
EXIT_REFRESH_FAILED = 1
EXIT_INVALID_ARGUMENT = 2
EXIT_NOT_READY = 3


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Keep a searchable catalog of the quote images in a GitHub repository."
    )
    parser.add_argument(
        "--config",
        default=str(CONFIG_FILE),
        help="Path to the JSON config file (default: %(default)s).",
    )
    parser.add_argument("--log-level", default=None, help="Override the configured log level.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("serve", help="Warm start, then refresh the catalog on a fixed interval.")
    subparsers.add_parser("refresh", help="Run one refresh cycle and print its report.")
    subparsers.add_parser("list", help="Print every cached image.")
    subparsers.add_parser("count", help="Print the number of cached images.")
    subparsers.add_parser("status", help="Print readiness, size and last refresh time.")

    search = subparsers.add_parser("search", help="Rank cached images against a keyword.")
    search.add_argument("keyword", help="Text to look for in image names.")
    search.add_argument("--limit", type=int, default=DEFAULT_SEARCH_LIMIT, help="Maximum results.")

    sample = subparsers.add_parser("random", help="Print a random selection of cached images.")
    sample.add_argument("--count", type=int, default=DEFAULT_RANDOM_COUNT, help="Number of images.")

    return parser.parse_args(argv)


def _emit(payload: Any) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False))


def _serve(controller: CatalogController) -> int:
    controller.start()
    try:
        while not controller.scheduler.is_stopped():
            time.sleep(1.0)
    except KeyboardInterrupt:
        logger.info("Interrupted; stopping image catalog")
    finally:
        controller.shutdown()
    return EXIT_OK


def run_command(args: argparse.Namespace, controller: CatalogController) -> int:
    """Execute a parsed subcommand against ``controller`` and return the exit code."""
    catalog = controller.catalog

    if args.command == "serve":
        return _serve(controller)

    if args.command == "refresh":
        controller.warm_start()
        report = controller.refresh_now()
        _emit(report.to_dict())
        return EXIT_OK if report.succeeded else EXIT_REFRESH_FAILED

    controller.warm_start()
    try:
        if args.command == "count":
            _emit({"count": catalog.count()})
        elif args.command == "status":
            _emit(catalog.status())
        elif args.command == "search":
            results = catalog.search(args.keyword, limit=args.limit)
            catalog.ensure_ready()
            _emit(results)
        elif args.command == "random":
            catalog.ensure_ready()
            _emit(catalog.random(count=args.count))
        else:
            catalog.ensure_ready()
            _emit(catalog.get_all())
    except InvalidArgumentError as exc:
        _emit({"error": str(exc)})
        return EXIT_INVALID_ARGUMENT
    except CacheEmptyError as exc:
        _emit({"error": "not_ready", "detail": str(exc)})
        return EXIT_NOT_READY
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    ensure_base_dirs()
    try:
        settings: CatalogSettings = load_settings(config_file=Path(args.config).expanduser())
        configure_logging(settings.logs_dir, level=args.log_level or settings.log_level)
    except InvalidArgumentError as exc:
        _emit({"error": str(exc)})
        return EXIT_INVALID_ARGUMENT
    return run_command(args, CatalogController(settings))


if __name__ == "__main__":
    raise SystemExit(main())
