"""Authorized Gmail session state."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from google.oauth2.credentials import Credentials

from .exceptions import AuthenticationError
from .models import ClientCredentials

# Default Gmail API scopes
DEFAULT_SCOPES = [
    "https://www.googleapis.com/auth/gmail.readonly",
]

TOKEN_URI = "https://oauth2.googleapis.com/token"


def _parse_expiry(value: Optional[str]) -> Optional[datetime]:
    """Parse the expiry written by Credentials.to_json (naive UTC)."""
    if not value:
        return None
    return datetime.strptime(value.rstrip("Z").split(".")[0], "%Y-%m-%dT%H:%M:%S")


@dataclass
class GmailSession:
    """OAuth client configuration plus the token currently attached to it.

    The session becomes ready once a token record is attached. Expired
    access tokens are refreshed by the transport when the record carries
    a refresh token, so no validity check happens here.

    Attributes:
        client: OAuth client credentials
        scopes: Scopes requested when acquiring a token
        token: Authorized-user token record, None until acquired
    """

    client: ClientCredentials
    scopes: list[str] = field(default_factory=lambda: list(DEFAULT_SCOPES))
    token: Optional[dict[str, Any]] = None

    @property
    def is_ready(self) -> bool:
        return self.token is not None

    def attach_token(self, record: dict[str, Any]) -> None:
        """Replace the session's token with a copy of record."""
        self.token = dict(record)

    def credentials(self) -> Credentials:
        """Build google-auth credentials from the attached token.

        Raises:
            AuthenticationError: If no token has been attached yet
        """
        if self.token is None:
            raise AuthenticationError("Session has no token; call authorize() first")

        # from_authorized_user_info rejects records without a refresh_token
        return Credentials(
            token=self.token.get("token"),
            refresh_token=self.token.get("refresh_token"),
            token_uri=self.token.get("token_uri", TOKEN_URI),
            client_id=self.client.client_id,
            client_secret=self.client.client_secret,
            scopes=self.token.get("scopes") or self.scopes,
            expiry=_parse_expiry(self.token.get("expiry")),
        )
