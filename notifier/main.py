from __future__ import annotations

import asyncio
import logging
import os
import sys
from typing import Optional

from .blocks import add_header, version_to_blocks
from .changelog import latest_version, parse_changelog, read_changelog
from .config import Config, ConfigurationError
from .errors import ReleaseNoteError
from .slack_client import send_blocks


def setup_logging() -> None:
    handlers = [logging.StreamHandler(sys.stdout)]
    log_file = os.getenv("LOG_FILE")
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
    )
    # Reduce httpx logging noise
    logging.getLogger('httpx').setLevel(logging.WARNING)


def report_failure(message: str) -> None:
    """Mark the workflow step as failed when running inside GitHub Actions."""
    if os.getenv("GITHUB_ACTIONS") == "true":
        print(f"::error::{message}", flush=True)


async def notify(cfg: Config) -> None:
    markdown = read_changelog(cfg.change_log_path)
    versions = parse_changelog(markdown)
    logging.info(f"Parsed {len(versions)} changelog versions")

    latest = latest_version(versions)
    logging.info(f"Latest version: {latest.version} ({latest.date})")

    blocks = add_header(version_to_blocks(latest), cfg.display_name)
    await send_blocks(cfg.webhook_url, blocks)


async def async_main(cfg: Optional[Config] = None) -> int:
    setup_logging()
    logging.info("Starting release note notifier...")

    try:
        if cfg is None:
            cfg = Config.from_env()
        cfg.validate()
        logging.info(f"Changelog path: {cfg.change_log_path}")
        logging.info(f"Display name: {cfg.display_name}")
    except ConfigurationError as e:
        logging.error(f"Configuration error: {e}")
        report_failure(str(e))
        return 2

    try:
        await notify(cfg)
    except ReleaseNoteError as e:
        logging.error(f"{e.__class__.__name__}: {e}")
        report_failure(str(e))
        return 1

    logging.info("Release note delivered")
    return 0


def main() -> None:
    raise SystemExit(asyncio.run(async_main()))
