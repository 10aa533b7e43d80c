"""RecentEmailOrchestrator - connects retrieval stages into a single run."""

import logging
import time
from typing import Any, Awaitable, Callable, Optional, TypeVar

from src.fetcher import (
    FetcherError,
    GmailApi,
    GmailSession,
    LabelResolver,
    MessageFetcher,
    MessageIdPaginator,
)

from .models import RetrievalResult, StepResult

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RecentEmailOrchestrator:
    """Orchestrates label resolution, id listing and message fetching.

    Stages run strictly in sequence. A failure in any stage is logged
    once here and re-raised unchanged; there is no partial result.

    Example:
        result = await RecentEmailOrchestrator(api).run(query="is:unread")
        print(f"Fetched {len(result.messages)} messages")
    """

    def __init__(
        self,
        api: GmailApi,
        label_resolver: Optional[LabelResolver] = None,
        paginator: Optional[MessageIdPaginator] = None,
        fetcher: Optional[MessageFetcher] = None,
    ):
        self._labels = label_resolver or LabelResolver(api)
        self._paginator = paginator or MessageIdPaginator(api)
        self._fetcher = fetcher or MessageFetcher(api)

    @staticmethod
    async def _run_step(
        result: RetrievalResult,
        name: str,
        step: Callable[[], Awaitable[T]],
        details: Callable[[T], dict[str, Any]],
    ) -> T:
        """Run one stage, recording its timing on success."""
        start = time.monotonic()
        value = await step()
        duration = time.monotonic() - start
        result.steps.append(
            StepResult(
                name=name,
                duration_seconds=round(duration, 2),
                details=details(value),
            )
        )
        return value

    async def run(self, query: str = "", label_name: str = "INBOX") -> RetrievalResult:
        """Retrieve every full message under label_name matching query.

        Steps:
            1. Resolve the label name to its ID
            2. List all matching message IDs
            3. Fetch full messages concurrently

        Returns:
            RetrievalResult with messages in listing order and per-step metrics.

        Raises:
            FetcherError: Whatever the failing stage raised
        """
        result = RetrievalResult()

        try:
            label_id = await self._run_step(
                result,
                "resolve_label",
                lambda: self._labels.resolve(label_name),
                lambda value: {"label": label_name, "label_id": value},
            )
            message_ids = await self._run_step(
                result,
                "list_messages",
                lambda: self._paginator.list_all(query, [label_id]),
                lambda value: {"message_ids": len(value)},
            )
            result.messages = await self._run_step(
                result,
                "fetch_messages",
                lambda: self._fetcher.fetch_all(message_ids),
                lambda value: {"messages_fetched": len(value)},
            )
        except FetcherError as e:
            logger.error("Error when getting recent emails: %s", e)
            raise

        logger.info(
            "Fetched %d messages from %s (query=%r)",
            len(result.messages),
            label_name,
            query,
        )
        return result


async def get_recent_email(
    session: GmailSession,
    query: str = "",
    label_name: str = "INBOX",
    api: Optional[GmailApi] = None,
) -> list[dict[str, Any]]:
    """Get full messages under a label from an authorized session.

    Args:
        session: Session returned by GmailAuthenticator.authorize
        query: Gmail search query used to filter the messages listed
        label_name: Exact, case-sensitive label name
        api: Pre-built GmailApi (for testing). Built from session if None.

    Returns:
        Full Gmail message payloads in listing order
    """
    orchestrator = RecentEmailOrchestrator(api or GmailApi.from_session(session))
    result = await orchestrator.run(query=query, label_name=label_name)
    return result.messages
