"""Paginated message ID listing."""

import logging
from typing import Optional

from .exceptions import ListError
from .gmail_api import TRANSPORT_ERRORS, GmailApi
from .models import MessagePage

logger = logging.getLogger(__name__)


class MessageIdPaginator:
    """Collects every message ID matching a query and label filter.

    Follows nextPageToken until Gmail stops returning one. IDs keep
    page-arrival order and within-page order; nothing is de-duplicated.
    """

    def __init__(self, api: GmailApi, page_size: Optional[int] = None):
        """Initialize the paginator.

        Args:
            api: Gmail API wrapper.
            page_size: maxResults per page. Defaults to Gmail's own default.
        """
        self._api = api
        self._page_size = page_size

    async def _fetch_page(
        self,
        query: str,
        label_ids: list[str],
        page_token: Optional[str],
        page_number: int,
    ) -> MessagePage:
        try:
            response = await self._api.list_messages(
                query,
                label_ids,
                page_token=page_token,
                page_size=self._page_size,
            )
        except TRANSPORT_ERRORS as e:
            raise ListError(page_number, e) from e
        return MessagePage.from_api_response(response)

    async def list_all(self, query: str, label_ids: list[str]) -> list[str]:
        """List all message IDs, paging until exhaustion.

        Args:
            query: Gmail search query ("" matches everything)
            label_ids: Label IDs every message must carry

        Returns:
            Message IDs in listing order

        Raises:
            ListError: If any page fails; IDs from earlier pages are discarded
        """
        message_ids: list[str] = []
        page_token: Optional[str] = None
        page_number = 0

        while True:
            page_number += 1
            page = await self._fetch_page(query, label_ids, page_token, page_number)
            message_ids.extend(page.message_ids)
            logger.debug(
                "Page %d: %d message ids (more: %s)",
                page_number,
                len(page.message_ids),
                page.has_more,
            )
            if not page.has_more:
                break
            page_token = page.next_page_token

        return message_ids
