"""
Integration test for Gmail API credentials and recent email retrieval.

Skipped unless config/credentials.json and config/token.json exist.
Run with: python -m pytest tests/test_gmail_integration.py -v
"""

import asyncio
from pathlib import Path

import pytest

from src.fetcher import GmailAuthenticator, load_client_credentials
from src.orchestrator import get_recent_email

# Paths
PROJECT_ROOT = Path(__file__).parent.parent
CREDENTIALS_PATH = PROJECT_ROOT / "config" / "credentials.json"
TOKEN_PATH = PROJECT_ROOT / "config" / "token.json"

pytestmark = pytest.mark.skipif(
    not (CREDENTIALS_PATH.exists() and TOKEN_PATH.exists()),
    reason="Gmail credentials and token not configured",
)


class TestGmailIntegration:
    """Integration tests for Gmail API."""

    @pytest.fixture(scope="class")
    def session(self):
        """Authorize once for all tests in this class, never prompting."""
        authenticator = GmailAuthenticator(interactive=False)
        return authenticator.authorize(
            load_client_credentials(CREDENTIALS_PATH), TOKEN_PATH
        )

    def test_can_authenticate(self, session):
        """Verify the stored token is attached."""
        assert session.is_ready

    def test_can_fetch_recent_email(self, session):
        """Fetch yesterday's inbox mail and verify it has content."""
        messages = asyncio.run(
            get_recent_email(session, query="newer_than:1d", label_name="INBOX")
        )

        for message in messages:
            assert "id" in message, "Message missing 'id' field"
            assert "threadId" in message, "Message missing 'threadId' field"
            assert "payload" in message, "Message missing 'payload' field"

        print(f"\nFetched {len(messages)} messages from the last day")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
