"""Response formatter for streamed chat events."""

import logging
from typing import TextIO

logger = logging.getLogger(__name__)


class ResponseFormatter:
    """Prints streamed content and collects the assistant's full reply."""

    def __init__(self, output: TextIO):
        self.output = output
        self.content_buffer: list[str] = []
        self.content_started = False
        self.failed = False

    @property
    def reply(self) -> str:
        return "".join(self.content_buffer)

    def handle_event(self, event: dict) -> None:
        """Handle a single event from ``ChatAPIClient.chat``."""
        event_type = event.get("type")

        if event_type == "content":
            content = event.get("content", "")
            self.content_buffer.append(content)
            if not self.content_started:
                self._print("\nAssistant:\n")
                self.content_started = True
            self._print(content)

        elif event_type == "error":
            self.failed = True
            message = event.get("message", "Unknown error")
            code = event.get("code", "UNKNOWN")
            self._print(f"\nError [{code}]: {message}\n")

        elif event_type == "done":
            pass

        else:
            logger.debug("Unknown event type: %s, event: %s", event_type, event)

    def finish_response(self) -> None:
        if self.content_started:
            self._print("\n")
        self.content_started = False

    def _print(self, text: str) -> None:
        self.output.write(text)
        self.output.flush()
