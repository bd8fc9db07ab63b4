"""Main CLI loop for interactive chat."""

import logging
import sys
from typing import TextIO

from .client import ChatAPIClient
from .config import CLIConfig
from .formatter import ResponseFormatter

logger = logging.getLogger(__name__)

EXIT_COMMANDS = ("exit", "quit", "q")


class CounselCLI:
    """Interactive terminal chat against the proxy.

    The conversation history lives here; every request carries the whole
    history, as the proxy keeps no state between calls.
    """

    def __init__(
        self,
        config: CLIConfig,
        input_stream: TextIO = sys.stdin,
        output_stream: TextIO = sys.stdout,
        client: ChatAPIClient | None = None,
    ):
        self.config = config
        self.input_stream = input_stream
        self.output_stream = output_stream
        self.client = client or ChatAPIClient(config)
        self.history: list[dict] = []

    async def run(self) -> None:
        """Run the interactive CLI loop."""
        try:
            self._print_welcome()
            while True:
                try:
                    query = self._get_user_input()
                    if not query.strip():
                        continue

                    if query.strip().lower() in EXIT_COMMANDS:
                        self._print("Goodbye!\n")
                        break

                    await self.send(query)

                except KeyboardInterrupt:
                    self._print("\n\nInterrupted. Use 'exit' or 'quit' to exit.\n")
                except EOFError:
                    self._print("\nGoodbye!\n")
                    break
        finally:
            await self.client.close()

    async def send(self, query: str) -> None:
        """Send one user turn; keep it in history only if the reply arrives."""
        formatter = ResponseFormatter(self.output_stream)
        messages = [*self.history, {"role": "user", "content": query}]

        async for event in self.client.chat(messages):
            formatter.handle_event(event)
        formatter.finish_response()

        if formatter.failed:
            return
        self.history = [*messages, {"role": "assistant", "content": formatter.reply}]

    def _get_user_input(self) -> str:
        self._print("> ")
        line = self.input_stream.readline()
        if not line:
            raise EOFError
        return line.rstrip("\n\r")

    def _print_welcome(self) -> None:
        self._print("Counsel CLI - Academic guidance chat\n")
        self._print(f"Connected to: {self.config.url}\n")
        self._print(f"Conversation: {self.config.conversation_id}\n")
        self._print(
            "Type your message and press Enter. Type 'exit' or 'quit' to exit.\n\n"
        )

    def _print(self, text: str) -> None:
        self.output_stream.write(text)
        self.output_stream.flush()


async def main(
    url: str,
    token: str,
    conversation_id: str | None = None,
    debug: bool = False,
) -> None:
    """Main entry point for the CLI."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    config = CLIConfig(url=url, token=token)
    if conversation_id:
        config.conversation_id = conversation_id

    cli = CounselCLI(config)
    await cli.run()
