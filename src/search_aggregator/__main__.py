"""
Search Aggregator HTTP server entry point.

Usage:
    python -m search_aggregator --port 8787
    search-aggregator --host 127.0.0.1 --log-level DEBUG

Command-line flags override the SEARCH_AGG_* environment variables.
"""

import argparse
import dataclasses
import logging

from search_aggregator.config import Settings
from search_aggregator.shared.logging import configure_logging

logger = logging.getLogger(__name__)


def build_parser(defaults: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run the Search Aggregator HTTP API"
    )
    parser.add_argument(
        "--host",
        default=defaults.host,
        help=f"Server host (default: {defaults.host})"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=defaults.port,
        help=f"Server port (default: {defaults.port})"
    )
    parser.add_argument(
        "--cache-ttl",
        type=int,
        default=defaults.cache_ttl_seconds,
        help="Cache entry lifetime in seconds"
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=defaults.http_timeout,
        help="Per-provider request timeout in seconds"
    )
    parser.add_argument(
        "--log-level",
        default=defaults.log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level"
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    defaults = Settings.from_env()
    args = build_parser(defaults).parse_args(argv)

    settings = dataclasses.replace(
        defaults,
        host=args.host,
        port=args.port,
        cache_ttl_seconds=args.cache_ttl,
        http_timeout=args.timeout,
        log_level=args.log_level,
    )
    configure_logging(settings.log_level)

    logger.info("Creating Search Aggregator server...")
    logger.info(f"  Host: {settings.host}")
    logger.info(f"  Port: {settings.port}")
    logger.info(f"  Cache TTL: {settings.cache_ttl_seconds}s, capacity {settings.cache_capacity}")
    logger.info(f"  Provider timeout: {settings.http_timeout}s")
    logger.info(f"  GitHub token: {'Set' if settings.github_token else 'Not set'}")

    from search_aggregator.api.server import run_api_server

    run_api_server(settings)


if __name__ == "__main__":
    main()
