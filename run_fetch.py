"""CLI entry point for retrieving recent Gmail messages."""

import argparse
import asyncio
import json
import sys
from pathlib import Path

from dotenv import load_dotenv

from src.fetcher import (
    FetcherError,
    GmailApi,
    GmailAuthenticator,
    load_client_credentials,
)
from src.logging_config import configure_logging
from src.orchestrator import RecentEmailOrchestrator


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Fetch recent emails from a Gmail label")
    parser.add_argument(
        "--query",
        default="",
        help="Gmail search query used to filter messages (default: all)",
    )
    parser.add_argument(
        "--label",
        default="INBOX",
        help="Exact label name to read from (default: INBOX)",
    )
    parser.add_argument(
        "--credentials",
        type=Path,
        default=None,
        help="OAuth client secrets file (overrides GMAIL_CREDENTIALS_PATH)",
    )
    parser.add_argument(
        "--token",
        type=Path,
        default=None,
        help="Token file (overrides GMAIL_TOKEN_PATH)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the fetched messages to this file as JSON",
    )
    parser.add_argument(
        "--non-interactive",
        action="store_true",
        help="Fail instead of prompting when no usable token is stored",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Set logging level (overrides LOG_LEVEL env var)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    load_dotenv()

    args = build_parser().parse_args(argv)
    configure_logging(level_override=args.log_level)

    try:
        credentials = load_client_credentials(args.credentials)
    except (FetcherError, ValueError, OSError) as e:
        print(f"ERROR: Could not load OAuth client credentials: {e}", file=sys.stderr)
        return 1

    try:
        authenticator = GmailAuthenticator(interactive=not args.non_interactive)
        session = authenticator.authorize(credentials, args.token)
        orchestrator = RecentEmailOrchestrator(GmailApi.from_session(session))
        result = asyncio.run(orchestrator.run(query=args.query, label_name=args.label))
    except FetcherError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    if args.output:
        try:
            with open(args.output, "w") as f:
                json.dump(result.messages, f, indent=2)
        except OSError as e:
            print(f"ERROR: Could not write {args.output}: {e}", file=sys.stderr)
            return 1

    # Print summary
    print("\n--- Retrieval Summary ---")
    for step in result.steps:
        print(f"  {step.name}: OK ({step.duration_seconds}s)")
        for key, value in step.details.items():
            print(f"    {key}: {value}")

    for message in result.messages:
        print(f"  [{message.get('id')}] {message.get('snippet', '')[:80]}")

    print(f"\nFetched {len(result.messages)} messages in {result.duration_seconds}s")
    return 0


if __name__ == "__main__":
    sys.exit(main())
