"""User-facing status messages."""

from enum import Enum
from typing import Optional, Protocol

from rich.console import Console
from rich.markup import escape


class MessageLevel(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


_STYLES = {
    MessageLevel.INFO: ("…", "cyan"),
    MessageLevel.SUCCESS: ("✓", "bold green"),
    MessageLevel.WARNING: ("!", "bold yellow"),
    MessageLevel.ERROR: ("✗", "bold red"),
}


class Notifier(Protocol):
    """Fire-and-forget message display."""

    def notify(self, message: str, level: MessageLevel = MessageLevel.INFO) -> None:
        ...


class ConsoleNotifier:
    """Notifier printing styled one-line messages to stderr.

    Example:
        >>> notifier = ConsoleNotifier()
        >>> notifier.notify("Page converted", MessageLevel.SUCCESS)
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(stderr=True)

    def notify(self, message: str, level: MessageLevel = MessageLevel.INFO) -> None:
        icon, style = _STYLES[MessageLevel(level)]
        self.console.print(f"[{style}]{icon}[/{style}] {escape(message)}")
