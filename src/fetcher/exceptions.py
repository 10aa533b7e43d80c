"""Exceptions for Gmail fetcher module."""

from typing import Optional


class FetcherError(Exception):
    """Base exception for all fetcher errors."""

    pass


class AuthenticationError(FetcherError):
    """Raised when Gmail authentication fails."""

    pass


class CredentialsNotFoundError(AuthenticationError):
    """Raised when the OAuth client secrets file is missing."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(
            f"Credentials file not found at {path}. "
            "Please download OAuth credentials from Google Cloud Console."
        )


class AuthExchangeError(AuthenticationError):
    """Raised when an authorization code cannot be exchanged for a token."""

    pass


class NonInteractiveAuthError(AuthenticationError):
    """Raised when authentication requires user interaction but running in non-interactive mode."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(
            f"Authentication requires user interaction but GMAIL_NON_INTERACTIVE=1 is set. "
            f"Reason: {reason}. "
            "Either run locally to re-authenticate, or update the stored token."
        )


class TokenRefreshError(AuthenticationError):
    """Raised when a stored token cannot be refreshed."""

    pass


class TokenStoreError(FetcherError):
    """Raised when a token record cannot be loaded or saved.

    Subclasses tell apart a missing record, a corrupt record and an
    I/O failure so callers can choose a policy per kind.
    """

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(message)


class TokenNotFoundError(TokenStoreError):
    """Raised when no token record exists at the given path."""

    def __init__(self, path: str):
        super().__init__(path, f"No stored token at {path}")


class TokenCorruptError(TokenStoreError):
    """Raised when a stored token record is unreadable or malformed."""

    def __init__(self, path: str, detail: str):
        self.detail = detail
        super().__init__(path, f"Stored token at {path} is corrupt: {detail}")


class TokenIOError(TokenStoreError):
    """Raised when reading or writing the token record fails at the OS level."""

    def __init__(self, path: str, detail: str):
        self.detail = detail
        super().__init__(path, f"Token storage I/O error at {path}: {detail}")


class LabelNotFoundError(FetcherError):
    """Raised when no mailbox label matches the requested name."""

    def __init__(self, name: str, available: Optional[list[str]] = None):
        self.name = name
        self.available = available or []
        super().__init__(
            f"Label '{name}' not found. Available labels: {self.available}"
        )


class LabelListError(FetcherError):
    """Raised when the labels listing call fails."""

    pass


class ListError(FetcherError):
    """Raised when any page of the message listing fails.

    Message ids gathered from earlier pages are discarded.
    """

    def __init__(self, page_number: int, cause: Exception):
        self.page_number = page_number
        self.cause = cause
        super().__init__(f"Failed to list messages (page {page_number}): {cause}")


class MessageFetchError(FetcherError):
    """Raised when fetching any message of a fan-out fails."""

    def __init__(self, message_id: str, cause: Exception):
        self.message_id = message_id
        self.cause = cause
        super().__init__(f"Failed to fetch message '{message_id}': {cause}")
