"""Rich console handler for similarity service events.

Where: platform/logging/handlers.py
What: Render structured ``graphql_event`` log records with icons and colours.
Why: Keep presentation concerns out of the transport and query modules.
"""

from __future__ import annotations

import logging
from typing import Any, ClassVar, override

from rich.console import ConsoleRenderable
from rich.logging import RichHandler
from rich.style import Style
from rich.text import Text


class ServiceRichHandler(RichHandler):
    """Custom Rich handler that renders similarity service events compactly."""

    _EVENT_STYLES: ClassVar[dict[str, tuple[str, str]]] = {
        "graphql.request.start": ("📡", "blue"),
        "graphql.request.complete": ("📨", "cyan"),
        "graphql.request.error": ("⛔", "red"),
        "similarity.lookup.found": ("🎧", "green"),
        "similarity.lookup.missing": ("❔", "yellow"),
        "similarity.similar.complete": ("✅", "green"),
    }
    _IDENTIFIER_LIMIT: ClassVar[int] = 16

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        """Initialize the handler with custom settings.

        Args:
            *args: Positional arguments to pass to RichHandler.
            **kwargs: Keyword arguments to pass to RichHandler.
        """
        kwargs["show_time"] = False
        kwargs["show_path"] = False
        kwargs["show_level"] = False
        kwargs["rich_tracebacks"] = True
        kwargs["markup"] = False
        kwargs["omit_repeated_times"] = False
        super().__init__(*args, **kwargs)

    @classmethod
    def _abbreviate(cls, value: str) -> str:
        """Shorten long hashes and identifiers with a trailing ellipsis."""

        if len(value) <= cls._IDENTIFIER_LIMIT:
            return value
        return value[: cls._IDENTIFIER_LIMIT] + "…"

    def _render_event_message(self, record: logging.LogRecord) -> Text | None:
        """Render structured service events with dedicated styling."""

        event = getattr(record, "graphql_event", None)
        if not isinstance(event, str):
            return None

        icon, color = self._EVENT_STYLES.get(event, ("ℹ️", "blue"))
        text = Text()
        _ = text.append(f"{icon} ", style=Style(color=color, bold=True))

        body = Text(style=Style(color=color))
        operation = getattr(record, "operation", None)

        if event.startswith("graphql.request"):
            label = {
                "graphql.request.start": "Sending ",
                "graphql.request.complete": "Received ",
                "graphql.request.error": "Failed ",
            }.get(event, "")
            _ = body.append(label)
            _ = body.append(str(operation or "query"), style=Style(color="white"))

            details: list[str] = []
            status = getattr(record, "status", None)
            if isinstance(status, int):
                details.append(f"status={status}")
            duration_ms = getattr(record, "duration_ms", None)
            if isinstance(duration_ms, (int, float)):
                details.append(f"{duration_ms:.2f} ms")
            error_message = getattr(record, "error_message", None)
            if error_message:
                details.append(str(error_message))
            if details:
                _ = body.append(" (" + ", ".join(details) + ")")
        elif event.startswith("similarity.lookup"):
            sha256 = getattr(record, "sha256", None)
            track_id = getattr(record, "track_id", None)
            if event == "similarity.lookup.found":
                _ = body.append("Track ")
                _ = body.append(str(track_id), style=Style(color="white"))
            else:
                _ = body.append("No track")
            if sha256:
                _ = body.append(f" for {self._abbreviate(str(sha256))}")
        else:
            track_id = getattr(record, "track_id", None)
            count = getattr(record, "count", None)
            _ = body.append("Similar tracks")
            if isinstance(count, int):
                _ = body.append(f" [{count}]")
            if track_id:
                _ = body.append(f" for {self._abbreviate(str(track_id))}")

        _ = text.append_text(body)
        return text

    @override
    def render_message(self, record: logging.LogRecord, message: str) -> ConsoleRenderable:
        """Render message with custom styling for service events."""

        event_text = self._render_event_message(record)
        if event_text is not None:
            return event_text

        return super().render_message(record, message)


__all__ = ["ServiceRichHandler"]
