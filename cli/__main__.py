"""Entry point for running the CLI as a module."""

import argparse
import asyncio
import os
import sys

from .counsel_cli import main

TOKEN_ENV_VAR = "COUNSEL_TOKEN"


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Interactive CLI for the Counsel chat proxy",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--url",
        type=str,
        default="http://localhost:8000/api/v1/chat",
        help="Chat endpoint URL (default: http://localhost:8000/api/v1/chat)",
    )
    parser.add_argument(
        "--token",
        type=str,
        default=os.environ.get(TOKEN_ENV_VAR, ""),
        help=f"Access token for the caller (default: ${TOKEN_ENV_VAR})",
    )
    parser.add_argument(
        "--conversation-id",
        type=str,
        default=None,
        help="Conversation identifier (default: a new UUID)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    return parser.parse_args()


def cli_entry() -> None:
    """CLI entry point."""
    args = parse_args()

    try:
        asyncio.run(
            main(
                url=args.url,
                token=args.token,
                conversation_id=args.conversation_id,
                debug=args.debug,
            )
        )
    except KeyboardInterrupt:
        sys.exit(0)


if __name__ == "__main__":
    cli_entry()
