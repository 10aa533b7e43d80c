#!/usr/bin/env python3
"""Local smoke test for run_fetch.py.

Validates that the OAuth credential and token files are present before
fetching the last day of INBOX mail without prompting.

Run from project root:
    python scripts/local_test_run_fetch.py
"""

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
CONFIG_DIR = PROJECT_ROOT / "config"

sys.path.insert(0, str(PROJECT_ROOT))
from dotenv import load_dotenv

load_dotenv(PROJECT_ROOT / ".env")

REQUIRED_FILES = [
    CONFIG_DIR / "credentials.json",
    CONFIG_DIR / "token.json",
]


def check_prerequisites() -> list[str]:
    return [
        f"Missing file: {path.relative_to(PROJECT_ROOT)}"
        for path in REQUIRED_FILES
        if not path.exists()
    ]


def main() -> int:
    print("Checking prerequisites ...\n")
    errors = check_prerequisites()

    if errors:
        for err in errors:
            print(f"  ✗ {err}")
        print(
            "\nSetup instructions:"
            "\n  1. Place OAuth credentials in config/credentials.json"
            "\n  2. Run 'python run_fetch.py' once interactively to generate config/token.json"
        )
        return 1

    for path in REQUIRED_FILES:
        print(f"  ✓ {path.relative_to(PROJECT_ROOT)}")

    print("\nAll prerequisites met. Fetching the last day of INBOX ...\n")

    import run_fetch

    return run_fetch.main(["--query", "newer_than:1d", "--non-interactive"])


if __name__ == "__main__":
    sys.exit(main())
