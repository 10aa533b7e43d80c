"""Async wrapper around the Gmail v1 discovery resource."""

import asyncio
import http.client
from typing import Any, Callable, Optional

import httplib2
from google.auth.exceptions import RefreshError, TransportError
from google_auth_httplib2 import AuthorizedHttp
from googleapiclient.discovery import Resource, build
from googleapiclient.errors import HttpError

from .session import GmailSession

# Errors a single API call can raise on the wire
TRANSPORT_ERRORS = (
    HttpError,
    httplib2.HttpLib2Error,
    http.client.HTTPException,
    RefreshError,
    TransportError,
    OSError,
)


class GmailApi:
    """Runs Gmail API requests in worker threads.

    googleapiclient requests are blocking, so every call executes through
    asyncio.to_thread. httplib2.Http is not thread safe; when an
    http_factory is given each request gets its own connection object.

    Example usage:
        api = GmailApi.from_session(session)
        labels = await api.list_labels()
    """

    def __init__(
        self,
        service: Resource,
        http_factory: Optional[Callable[[], Any]] = None,
        user_id: str = "me",
    ):
        """Initialize the wrapper.

        Args:
            service: Gmail API service resource (a mock in tests).
            http_factory: Returns a fresh authorized http object per request.
                If None, requests use the service's own http.
            user_id: Mailbox owner, "me" for the authenticated user.
        """
        self._service = service
        self._http_factory = http_factory
        self._user_id = user_id

    @classmethod
    def from_session(cls, session: GmailSession) -> "GmailApi":
        """Build the Gmail service for an authorized session."""
        creds = session.credentials()
        service = build("gmail", "v1", credentials=creds, cache_discovery=False)
        return cls(service, http_factory=lambda: AuthorizedHttp(creds, http=httplib2.Http()))

    async def _execute(self, request) -> dict[str, Any]:
        if self._http_factory is None:
            return await asyncio.to_thread(request.execute)
        return await asyncio.to_thread(request.execute, http=self._http_factory())

    async def list_labels(self) -> list[dict[str, Any]]:
        """List every label in the mailbox (not paginated by Gmail)."""
        request = self._service.users().labels().list(userId=self._user_id)
        response = await self._execute(request)
        return response.get("labels", [])

    async def list_messages(
        self,
        query: str,
        label_ids: list[str],
        page_token: Optional[str] = None,
        page_size: Optional[int] = None,
    ) -> dict[str, Any]:
        """Fetch one page of message ids matching query and labels.

        Returns:
            Raw response with optional "messages" and "nextPageToken"
        """
        params: dict[str, Any] = {
            "userId": self._user_id,
            "q": query,
            "labelIds": label_ids,
        }
        if page_token:
            params["pageToken"] = page_token
        if page_size:
            params["maxResults"] = page_size

        request = self._service.users().messages().list(**params)
        return await self._execute(request)

    async def get_message(self, message_id: str) -> dict[str, Any]:
        """Fetch a full message by ID."""
        request = self._service.users().messages().get(
            userId=self._user_id,
            id=message_id,
            format="full",
        )
        return await self._execute(request)
