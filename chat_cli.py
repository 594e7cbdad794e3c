"""Interactive terminal client for the /api/chat relay."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence


PROJECT_ROOT = Path(__file__).resolve().parent
API_CODE_PATH = PROJECT_ROOT / "api-code"
if str(API_CODE_PATH) not in sys.path:
    sys.path.insert(0, str(API_CODE_PATH))

from ui import ChatController, RelayClient, TerminalDisplay  # noqa: E402


EXIT_WORDS = {"exit", "quit"}


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Interactive chat client for the Gemini relay")
    parser.add_argument(
        "--url",
        default="http://127.0.0.1:3000",
        help="Base URL of the relay server",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=30.0,
        help="Request timeout in seconds",
    )
    return parser.parse_args(argv)


async def run(controller: ChatController) -> None:
    while True:
        try:
            user_input = await asyncio.to_thread(input, "> ")
        except EOFError:
            print()
            break

        if user_input.strip().lower() in EXIT_WORDS:
            break
        await controller.submit(user_input)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.WARNING)

    controller = ChatController(TerminalDisplay(), RelayClient(args.url, timeout=args.timeout))
    print("Type your messages. Ctrl+D or 'exit' to quit.")
    try:
        asyncio.run(run(controller))
    except KeyboardInterrupt:
        print()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
