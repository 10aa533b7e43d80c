"""Gmail API authentication helper."""

import json
import logging
import os
from pathlib import Path
from typing import Optional

from google.auth.exceptions import RefreshError, TransportError
from google.auth.transport.requests import Request

from .exceptions import (
    NonInteractiveAuthError,
    TokenCorruptError,
    TokenRefreshError,
    TokenStoreError,
)
from .interactive_grant import InteractiveGrant, UserPrompt
from .models import ClientCredentials
from .session import DEFAULT_SCOPES, GmailSession
from .token_store import JsonFileTokenStore, TokenPath, TokenStore

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).parent.parent.parent


def default_credentials_path() -> Path:
    """GMAIL_CREDENTIALS_PATH env var, or config/credentials.json."""
    if os.environ.get("GMAIL_CREDENTIALS_PATH"):
        return Path(os.environ["GMAIL_CREDENTIALS_PATH"])
    return PROJECT_ROOT / "config" / "credentials.json"


def default_token_path() -> Path:
    """GMAIL_TOKEN_PATH env var, or config/token.json."""
    if os.environ.get("GMAIL_TOKEN_PATH"):
        return Path(os.environ["GMAIL_TOKEN_PATH"])
    return PROJECT_ROOT / "config" / "token.json"


def load_client_credentials(credentials_path: Optional[Path] = None) -> ClientCredentials:
    """Load OAuth client credentials, falling back to the default path."""
    return ClientCredentials.from_file(credentials_path or default_credentials_path())


class GmailAuthenticator:
    """Handles Gmail API authentication with a stored-token fallback.

    authorize() loads a previously stored token and, when that fails,
    runs the interactive authorization-code grant once. Stored tokens
    are not checked for expiry; the transport refreshes them on use.
    """

    def __init__(
        self,
        token_store: Optional[TokenStore] = None,
        prompt: Optional[UserPrompt] = None,
        scopes: Optional[list[str]] = None,
        interactive: bool = True,
        reprompt_on_corrupt: bool = True,
        grant: Optional[InteractiveGrant] = None,
    ):
        """Initialize the authenticator.

        Args:
            token_store: Token persistence. Defaults to JsonFileTokenStore.
            prompt: User interaction for the grant. Defaults to the console.
            scopes: List of Gmail API scopes to request.
                Defaults to the read-only scope.
            interactive: If False, raise an error instead of prompting for a code.
                Also checks GMAIL_NON_INTERACTIVE env var. Defaults to True.
            reprompt_on_corrupt: If False, a corrupt stored token raises
                TokenCorruptError instead of prompting for a new grant.
            grant: Pre-built InteractiveGrant (for testing).
        """
        self._store = token_store or JsonFileTokenStore()
        self._scopes = list(scopes or DEFAULT_SCOPES)
        self._grant = grant or InteractiveGrant(self._store, prompt=prompt)
        self._reprompt_on_corrupt = reprompt_on_corrupt

        # Non-interactive mode: check both parameter and env var
        self._interactive = interactive and not os.environ.get("GMAIL_NON_INTERACTIVE")

    @property
    def scopes(self) -> list[str]:
        return list(self._scopes)

    def authorize(
        self,
        credentials: ClientCredentials,
        token_path: Optional[TokenPath] = None,
    ) -> GmailSession:
        """Return a session carrying a stored or newly granted token.

        Args:
            credentials: OAuth client credentials
            token_path: Where the token is stored. Defaults to
                GMAIL_TOKEN_PATH env var, or config/token.json.

        Returns:
            Session with a token attached

        Raises:
            TokenCorruptError: If the stored token is corrupt and
                reprompt_on_corrupt is False
            NonInteractiveAuthError: If a grant is needed in non-interactive mode
            AuthExchangeError: If the interactive grant fails
        """
        token_path = token_path or default_token_path()
        session = GmailSession(client=credentials, scopes=self.scopes)

        try:
            session.attach_token(self._store.get(token_path))
            logger.debug("Loaded stored token from %s", token_path)
            return session
        except TokenCorruptError:
            if not self._reprompt_on_corrupt:
                raise
            logger.warning(
                "Stored token at %s is corrupt, requesting a new grant",
                token_path,
                exc_info=True,
            )
            reason = "Stored token is corrupt"
        except TokenStoreError as e:
            logger.info(
                "No usable stored token (%s), requesting a new grant",
                type(e).__name__,
            )
            reason = str(e)

        if not self._interactive:
            raise NonInteractiveAuthError(reason)

        return self._grant.run(session, token_path)

    def refresh(
        self,
        session: GmailSession,
        token_path: Optional[TokenPath] = None,
    ) -> GmailSession:
        """Force a token refresh and persist the refreshed record.

        Raises:
            TokenRefreshError: If the token has no refresh token or the
                provider rejects the refresh
            TokenIOError: If the refreshed token could not be saved
        """
        token_path = token_path or default_token_path()
        creds = session.credentials()
        if not creds.refresh_token:
            raise TokenRefreshError("Token has no refresh_token; re-authorize instead")

        try:
            creds.refresh(Request())
        except (RefreshError, TransportError) as e:
            raise TokenRefreshError(f"Failed to refresh token: {e}") from e

        record = json.loads(creds.to_json())
        session.attach_token(record)
        self._store.store(record, token_path)
        logger.info("Refreshed token stored at %s", token_path)
        return session
