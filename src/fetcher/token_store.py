"""Token store interfaces for persisting OAuth token records."""

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Union

from .exceptions import TokenCorruptError, TokenIOError, TokenNotFoundError

TokenPath = Union[str, Path]

# A record must carry at least one of these to be usable
_TOKEN_FIELDS = ("token", "refresh_token")


class TokenStore(ABC):
    """Interface for loading and saving OAuth token records.

    Implementations can use different backends:
    - JsonFileTokenStore: authorized-user JSON files on disk
    - InMemoryTokenStore: For testing, records live in a dict
    """

    @abstractmethod
    def get(self, path: TokenPath) -> dict[str, Any]:
        """Load the token record stored under path.

        Raises:
            TokenNotFoundError: If nothing is stored under path
            TokenCorruptError: If the stored record is malformed
            TokenIOError: If the backend fails to read
        """
        pass

    @abstractmethod
    def store(self, record: dict[str, Any], path: TokenPath) -> None:
        """Persist record under path, replacing any previous record.

        Raises:
            TokenIOError: If the backend fails to write
        """
        pass


def validate_record(record: Any, path: TokenPath) -> dict[str, Any]:
    """Check that record looks like a token and return it."""
    if not isinstance(record, dict):
        raise TokenCorruptError(str(path), f"expected JSON object, got {type(record).__name__}")
    if not any(record.get(name) for name in _TOKEN_FIELDS):
        raise TokenCorruptError(str(path), "record has neither token nor refresh_token")
    return record


class JsonFileTokenStore(TokenStore):
    """Stores token records as JSON files, one file per path."""

    def get(self, path: TokenPath) -> dict[str, Any]:
        token_path = Path(path)
        if not token_path.exists():
            raise TokenNotFoundError(str(token_path))

        try:
            with open(token_path, encoding="utf-8") as token_file:
                record = json.load(token_file)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise TokenCorruptError(str(token_path), str(e)) from e
        except OSError as e:
            raise TokenIOError(str(token_path), str(e)) from e

        return validate_record(record, token_path)

    def store(self, record: dict[str, Any], path: TokenPath) -> None:
        token_path = Path(path)
        try:
            token_path.parent.mkdir(parents=True, exist_ok=True)
            with open(token_path, "w") as token_file:
                json.dump(record, token_file, indent=2)
        except OSError as e:
            raise TokenIOError(str(token_path), str(e)) from e


class InMemoryTokenStore(TokenStore):
    """In-memory implementation for testing.

    Records are copied on the way in and out so callers cannot mutate
    what is stored.
    """

    def __init__(self) -> None:
        self._records: dict[str, dict[str, Any]] = {}

    def get(self, path: TokenPath) -> dict[str, Any]:
        key = str(path)
        if key not in self._records:
            raise TokenNotFoundError(key)
        return validate_record(dict(self._records[key]), key)

    def store(self, record: dict[str, Any], path: TokenPath) -> None:
        self._records[str(path)] = dict(record)

    def clear(self) -> None:
        """Remove all records. Useful for testing."""
        self._records.clear()
