"""Console-driven OAuth authorization-code exchange."""

import json
import logging
from abc import ABC, abstractmethod
from typing import Callable, Optional

from google_auth_oauthlib.flow import Flow
from oauthlib.oauth2.rfc6749.errors import OAuth2Error
from requests.exceptions import RequestException

from .exceptions import AuthExchangeError
from .session import GmailSession
from .token_store import TokenPath, TokenStore

logger = logging.getLogger(__name__)


class UserPrompt(ABC):
    """Interface for showing the authorization URL and reading the code back."""

    @abstractmethod
    def show_authorization_url(self, url: str) -> None:
        pass

    @abstractmethod
    def read_code(self) -> str:
        """Block until the user enters one line of text."""
        pass


class ConsolePrompt(UserPrompt):
    """Prompts on stdout and reads the code from stdin."""

    def show_authorization_url(self, url: str) -> None:
        print(f"Authorize this app by visiting this url: {url}")

    def read_code(self) -> str:
        return input("Enter the code from that page here: ")


def build_flow(session: GmailSession) -> Flow:
    """Create an OAuth flow for the session's client and scopes."""
    return Flow.from_client_config(
        session.client.to_client_config(),
        scopes=session.scopes,
        redirect_uri=session.client.redirect_uri,
    )


class InteractiveGrant:
    """Acquires an offline-access token by asking the user for a code.

    Makes exactly one attempt per run(). The caller retries by calling
    again.

    Example usage:
        grant = InteractiveGrant(JsonFileTokenStore())
        session = grant.run(GmailSession(client), "config/token.json")
    """

    def __init__(
        self,
        token_store: TokenStore,
        prompt: Optional[UserPrompt] = None,
        flow_factory: Optional[Callable[[GmailSession], Flow]] = None,
    ):
        """Initialize the grant.

        Args:
            token_store: Where the acquired token is persisted.
            prompt: User interaction. Defaults to ConsolePrompt.
            flow_factory: Builds the OAuth flow for a session (for testing).
        """
        self._store = token_store
        self._prompt = prompt or ConsolePrompt()
        self._flow_factory = flow_factory or build_flow

    def run(self, session: GmailSession, token_path: TokenPath) -> GmailSession:
        """Run the authorization-code exchange and persist the token.

        Returns:
            The same session with the new token attached

        Raises:
            AuthExchangeError: If no code was entered or the exchange failed.
                Nothing is persisted in that case.
            TokenIOError: If the token was acquired but could not be saved
        """
        flow = self._flow_factory(session)
        auth_url, _ = flow.authorization_url(access_type="offline")
        self._prompt.show_authorization_url(auth_url)

        try:
            code = self._prompt.read_code().strip()
        except EOFError as e:
            raise AuthExchangeError("No authorization code entered") from e
        if not code:
            raise AuthExchangeError("No authorization code entered")

        try:
            flow.fetch_token(code=code)
        # oauthlib raises Warning when granted scopes differ from requested
        except (OAuth2Error, RequestException, ValueError, Warning) as e:
            raise AuthExchangeError(f"Failed to exchange authorization code: {e}") from e

        record = json.loads(flow.credentials.to_json())
        session.attach_token(record)
        self._store.store(record, token_path)
        logger.info("Stored new token at %s", token_path)
        return session
