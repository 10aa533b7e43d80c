"""Concurrent full-message retrieval."""

import asyncio
import logging
from typing import Any

from .exceptions import MessageFetchError
from .gmail_api import TRANSPORT_ERRORS, GmailApi

logger = logging.getLogger(__name__)


class MessageFetcher:
    """Fetches full messages for a list of IDs concurrently.

    Every ID gets its own task; there is no batching or throttling.
    The blocking wire calls still run on the default thread pool, so at
    most min(32, cpu_count + 4) requests are on the wire at once.
    The first failure aborts the join. Calls still in flight are left
    to finish and their results are dropped.
    """

    def __init__(self, api: GmailApi):
        self._api = api

    async def _fetch_one(self, message_id: str) -> dict[str, Any]:
        try:
            return await self._api.get_message(message_id)
        except TRANSPORT_ERRORS as e:
            raise MessageFetchError(message_id, e) from e

    async def fetch_all(self, message_ids: list[str]) -> list[dict[str, Any]]:
        """Fetch every message, returning payloads in the order of message_ids.

        Raises:
            MessageFetchError: If any fetch fails; no partial result is returned
        """
        if not message_ids:
            return []

        logger.debug("Fetching %d messages", len(message_ids))
        messages = await asyncio.gather(
            *(self._fetch_one(message_id) for message_id in message_ids)
        )
        return list(messages)
