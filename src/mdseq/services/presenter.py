"""Presentation of conversion results.

Results are shown under a key so a later command can dismiss them, and can
be copied to the system clipboard.
"""

from typing import Optional, Protocol

import pyperclip
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from mdseq.services.exceptions import ClipboardError


class ResultPresenter(Protocol):
    """Keyed result display plus clipboard access."""

    def show(self, key: str, title: str, content: str) -> None:
        ...

    def dismiss(self, key: str) -> None:
        ...

    def copy(self, content: str) -> None:
        ...


class ConsolePresenter:
    """ResultPresenter rendering results as rich panels.

    Attributes:
        shown: Keys of results currently on display, with their content
    """

    def __init__(self, console: Optional[Console] = None, raw: bool = False):
        self.console = console or Console()
        self.raw = raw
        self.shown: dict[str, str] = {}

    def show(self, key: str, title: str, content: str) -> None:
        self.shown[key] = content
        if self.raw:
            # Exact text for piping, tabs included
            self.console.file.write(content + "\n")
            return
        # Text keeps tabs and brackets literal
        body = Text(content.expandtabs(4))
        self.console.print(Panel(body, title=f"[bold]{escape(title)}[/bold]", border_style="green"))

    def dismiss(self, key: str) -> None:
        self.shown.pop(key, None)

    def copy(self, content: str) -> None:
        """Copy content to the system clipboard.

        Raises:
            ClipboardError: If no clipboard mechanism is available
        """
        try:
            pyperclip.copy(content)
        except pyperclip.PyperclipException as e:
            raise ClipboardError(f"Clipboard unavailable: {e}") from e
