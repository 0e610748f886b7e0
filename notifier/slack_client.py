from __future__ import annotations

import logging
from typing import List, Optional

import httpx

from .blocks import Block, build_payload
from .errors import DeliveryFailure


REQUEST_TIMEOUT = 30  # seconds


async def send_blocks(
    webhook_url: str,
    blocks: List[Block],
    *,
    timeout: float = REQUEST_TIMEOUT,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> None:
    """POST the blocks to a Slack incoming webhook.

    Anything other than HTTP 200 is a failure. There is no retry: the
    run reports the error and exits.
    """
    logging.info(f"Sending {len(blocks)} blocks to Slack webhook")
    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
            resp = await client.post(webhook_url, json=build_payload(blocks))
    except httpx.HTTPError as e:
        logging.error(f"Webhook request failed: {e}")
        raise DeliveryFailure(str(e) or e.__class__.__name__) from e

    if resp.status_code != 200:
        logging.error(f"Webhook responded {resp.status_code}: {resp.text[:200]}")
        raise DeliveryFailure(f"Request failed with status code {resp.status_code}")
    logging.info("Message sent successfully")
