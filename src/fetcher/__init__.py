"""Gmail fetcher module for authorizing and retrieving messages.

This module provides OAuth session handling and the label, listing and
fan-out fetch components used to retrieve full messages from Gmail.

Public API:
    - GmailAuthenticator: Load-or-acquire OAuth session
    - GmailSession: Client credentials plus attached token
    - InteractiveGrant: Authorization-code exchange via a user prompt
    - TokenStore: Interface for persisting token records
    - GmailApi: Async wrapper over the Gmail service
    - LabelResolver, MessageIdPaginator, MessageFetcher: Retrieval stages
    - FetcherError: Base exception for all fetcher failures
"""

from .exceptions import (
    AuthenticationError,
    AuthExchangeError,
    CredentialsNotFoundError,
    FetcherError,
    LabelListError,
    LabelNotFoundError,
    ListError,
    MessageFetchError,
    NonInteractiveAuthError,
    TokenCorruptError,
    TokenIOError,
    TokenNotFoundError,
    TokenRefreshError,
    TokenStoreError,
)
from .gmail_api import GmailApi
from .gmail_auth import GmailAuthenticator, load_client_credentials
from .interactive_grant import ConsolePrompt, InteractiveGrant, UserPrompt
from .labels import LabelResolver
from .message_fetcher import MessageFetcher
from .models import ClientCredentials, Label, MessagePage
from .paginator import MessageIdPaginator
from .session import DEFAULT_SCOPES, GmailSession
from .token_store import InMemoryTokenStore, JsonFileTokenStore, TokenStore

__all__ = [
    "GmailAuthenticator",
    "GmailSession",
    "InteractiveGrant",
    "UserPrompt",
    "ConsolePrompt",
    "TokenStore",
    "JsonFileTokenStore",
    "InMemoryTokenStore",
    "GmailApi",
    "LabelResolver",
    "MessageIdPaginator",
    "MessageFetcher",
    "ClientCredentials",
    "Label",
    "MessagePage",
    "DEFAULT_SCOPES",
    "load_client_credentials",
    "FetcherError",
    "AuthenticationError",
    "AuthExchangeError",
    "CredentialsNotFoundError",
    "NonInteractiveAuthError",
    "TokenRefreshError",
    "TokenStoreError",
    "TokenNotFoundError",
    "TokenCorruptError",
    "TokenIOError",
    "LabelNotFoundError",
    "LabelListError",
    "ListError",
    "MessageFetchError",
]
