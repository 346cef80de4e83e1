#!/usr/bin/env python
"""CLI for newsdesk: print headlines or serve the API."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Literal

import uvicorn
from pydantic import BaseModel, field_validator

from newsdesk.api import create_app
from newsdesk.config import create_services, get_default_config_path, load_config
from newsdesk.errors import NewsdeskError

logger = logging.getLogger(__name__)


class CLIArgs(BaseModel):
    """Validated CLI arguments."""

    command: Literal["news", "serve"]
    config: Path
    category: str | None = None
    host: str | None = None
    port: int | None = None
    log: bool = False
    log_dir: str = "logs"

    @field_validator("config")
    @classmethod
    def config_must_exist(cls, v: Path) -> Path:
        if not v.exists():
            raise ValueError(f"Config file not found: {v}")
        return v


async def show_news(args: CLIArgs) -> None:
    """Fetch merged headlines for a category and print them.

    Args:
        args: Validated CLI arguments.
    """
    config = load_config(args.config)
    services = create_services(
        config,
        log_override=args.log if args.log else None,
        log_dir_override=args.log_dir if args.log_dir != "logs" else None,
    )
    logger.info(f"Fetching {args.category or 'general'} headlines")
    logger.info(f"Config: {args.config}")

    feed = await services.aggregator.fetch(args.category)

    print(f"\nFound {len(feed.articles)} unique articles:\n")
    for i, article in enumerate(feed.articles, 1):
        logger.info(f"{i}. {article.title}")
        logger.info(f"   Source: {article.source.name}")
        logger.info(f"   URL: {article.url}")
        logger.info(f"   Published: {article.published_at.isoformat()}")

    logger.info("\n--- Usage Summary ---")
    logger.info(f"News requests: {feed.usage.news_requests}")

    if services.run_logger and services.run_logger.last_log_path:
        logger.info(f"\nRun log written to: {services.run_logger.last_log_path}")


def serve(args: CLIArgs) -> None:
    """Run the HTTP API with uvicorn."""
    config = load_config(args.config)
    services = create_services(
        config,
        log_override=args.log if args.log else None,
        log_dir_override=args.log_dir if args.log_dir != "logs" else None,
    )
    for name, reason in services.unavailable.items():
        logger.warning(f"{name} disabled: {reason}")

    uvicorn.run(
        create_app(services),
        host=args.host or config.api.host,
        port=args.port or config.api.port,
    )


def main() -> None:
    """Entry point for the CLI."""
    parser = argparse.ArgumentParser(description="Interactive news reader backend.")
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Path to YAML config file (default: configs/default.yaml)",
    )
    parser.add_argument(
        "--log",
        action="store_true",
        default=False,
        help="Enable news run logging to JSON files",
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default="logs",
        help="Directory for log files (default: logs/)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    news = commands.add_parser("news", help="Print merged headlines")
    news.add_argument(
        "--category",
        default=None,
        help="general, business, technology, science or health (default: general)",
    )

    server = commands.add_parser("serve", help="Serve the HTTP API")
    server.add_argument("--host", default=None, help="Bind address (default: from config)")
    server.add_argument("--port", type=int, default=None, help="Port (default: from config)")

    logging.basicConfig(level=logging.INFO, format="%(message)s")

    ns = parser.parse_args()
    config_path: Path = ns.config if ns.config else get_default_config_path()

    try:
        args = CLIArgs(
            command=ns.command,
            config=config_path,
            category=getattr(ns, "category", None),
            host=getattr(ns, "host", None),
            port=getattr(ns, "port", None),
            log=ns.log,
            log_dir=ns.log_dir,
        )
    except Exception as e:
        logger.error(str(e))
        sys.exit(1)

    try:
        if args.command == "serve":
            serve(args)
        else:
            asyncio.run(show_news(args))
    except NewsdeskError as e:
        logger.error(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
