"""Document model for pages held by a document store."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Document:
    """A page that conversions read from and write to.

    Attributes:
        name: Page name, used as the document id
        path: Page file inside the graph
    """

    name: str
    path: Path

    @property
    def id(self) -> str:
        return self.name
