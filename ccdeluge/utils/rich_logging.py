"""Rich logging integration for ccDeluge.

Provides a Rich console handler carrying correlation IDs and a plain file
formatter that strips Rich markup.
"""

from __future__ import annotations

import logging
import re
import sys
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape


class CorrelationRichHandler(RichHandler):
    """RichHandler with correlation ID support.

    RPC method names (``core.get_listen_port``) are colored bright cyan.
    """

    METHOD_PATTERN = re.compile(r"\b(?:core|daemon)\.[a-z_]+\b")

    def __init__(self, *args: Any, console: Console | None = None, **kwargs: Any) -> None:
        """Initialize RichHandler with markup enabled."""
        if console is None:
            console = Console(file=sys.stdout, markup=True, color_system="auto")
        kwargs.setdefault("markup", True)
        super().__init__(*args, console=console, **kwargs)

    def _colorize_methods(self, message: str) -> str:
        return self.METHOD_PATTERN.sub(lambda m: f"[bright_cyan]{m.group(0)}[/bright_cyan]", message)

    def emit(self, record: logging.LogRecord) -> None:
        """Emit a record with correlation ID and method coloring."""
        record = logging.makeLogRecord(record.__dict__)
        if not hasattr(record, "correlation_id"):
            from ccdeluge.utils.logging_config import correlation_id

            record.correlation_id = correlation_id.get() or "no-correlation-id"

        record.msg = self._colorize_methods(escape(record.getMessage()))
        record.args = ()
        super().emit(record)


def strip_rich_markup(text: str) -> str:
    """Remove Rich markup tags like ``[bold]`` or ``[/bright_cyan]``."""
    return re.sub(r"\[/?[a-z#0-9_ ]+\]", "", text)


class FileFormatter(logging.Formatter):
    """Formatter for file output that strips Rich markup."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record, stripping Rich markup for file output."""
        return strip_rich_markup(super().format(record))


def create_rich_handler(
    console: Console | None = None,
    level: int | str = logging.INFO,
    show_path: bool = False,
    rich_tracebacks: bool = True,
) -> logging.Handler:
    """Create a RichHandler with correlation ID support.

    Args:
        console: Optional Rich Console instance
        level: Log level
        show_path: Whether to show file paths in log output
        rich_tracebacks: Whether to use rich tracebacks

    """
    return CorrelationRichHandler(
        console=console,
        level=level,
        show_path=show_path,
        rich_tracebacks=rich_tracebacks,
    )
