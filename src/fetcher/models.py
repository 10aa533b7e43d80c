"""Data models for the fetcher module."""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from .exceptions import CredentialsNotFoundError


@dataclass(frozen=True)
class ClientCredentials:
    """OAuth client configuration for an installed or web application.

    Attributes:
        client_id: OAuth client ID
        client_secret: OAuth client secret
        redirect_uri: Redirect URI registered for the client
    """

    client_id: str
    client_secret: str
    redirect_uri: str

    @classmethod
    def from_client_config(cls, config: dict[str, Any]) -> "ClientCredentials":
        """Build from a Google client secrets document.

        Raises:
            ValueError: If the document has no 'installed' or 'web' entry,
                or lacks a client ID, secret or redirect URI.
        """
        if "installed" in config:
            app = config["installed"]
        elif "web" in config:
            app = config["web"]
        else:
            raise ValueError(
                "Invalid credentials.json format. Expected 'installed' or 'web' key."
            )

        redirect_uris = app.get("redirect_uris") or []
        try:
            return cls(
                client_id=app["client_id"],
                client_secret=app["client_secret"],
                redirect_uri=redirect_uris[0],
            )
        except (KeyError, IndexError) as e:
            raise ValueError(f"Incomplete client credentials: missing {e}") from e

    @classmethod
    def from_file(cls, path: Path) -> "ClientCredentials":
        """Load from a client secrets JSON file downloaded from Cloud Console."""
        if not path.exists():
            raise CredentialsNotFoundError(str(path))
        with open(path) as f:
            return cls.from_client_config(json.load(f))

    def to_client_config(self) -> dict[str, Any]:
        """Serialize to the 'installed' client secrets layout."""
        return {
            "installed": {
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "auth_uri": "https://accounts.google.com/o/oauth2/auth",
                "token_uri": "https://oauth2.googleapis.com/token",
                "redirect_uris": [self.redirect_uri],
            }
        }


@dataclass(frozen=True)
class Label:
    """A Gmail label as returned by users.labels.list."""

    id: str
    name: str
    type: str = "user"

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> "Label":
        return cls(id=data["id"], name=data["name"], type=data.get("type", "user"))


@dataclass
class MessagePage:
    """One page of the users.messages.list response."""

    message_ids: list[str] = field(default_factory=list)
    next_page_token: Optional[str] = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> "MessagePage":
        # Gmail omits "messages" entirely when a page is empty
        messages = data.get("messages") or []
        return cls(
            message_ids=[m["id"] for m in messages],
            next_page_token=data.get("nextPageToken") or None,
        )

    @property
    def has_more(self) -> bool:
        return self.next_page_token is not None
