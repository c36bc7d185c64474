"""Logseq graph path operations.

This module maps page names to page files inside a Logseq graph directory.
"""

from pathlib import Path

# Logseq stores namespaced pages ("Project/Notes") as "Project___Notes.md"
NAMESPACE_SEPARATOR = "___"


class GraphPaths:
    """Utility class for Logseq graph path operations.

    Attributes:
        graph_path: Root path to Logseq graph directory
    """

    def __init__(self, graph_path: Path):
        """Initialize with graph root path.

        Args:
            graph_path: Path to Logseq graph directory

        Raises:
            ValueError: If graph_path doesn't exist or isn't a directory
        """
        if not graph_path.exists():
            raise ValueError(f"Graph path does not exist: {graph_path}")
        if not graph_path.is_dir():
            raise ValueError(f"Graph path is not a directory: {graph_path}")

        self.graph_path = graph_path

    @property
    def pages_dir(self) -> Path:
        return self.graph_path / "pages"

    @property
    def journals_dir(self) -> Path:
        return self.graph_path / "journals"

    def get_page_path(self, page_name: str) -> Path:
        """Get path to specific page file.

        Journal pages ("2025_01_15") resolve into journals/ when such a file
        exists there; everything else lives in pages/.

        Args:
            page_name: Page name (e.g., "Project X" or "Project/Notes")

        Returns:
            Path to page file (e.g., pages/Project___Notes.md)
        """
        file_name = f"{page_name.replace('/', NAMESPACE_SEPARATOR)}.md"
        journal_path = self.journals_dir / file_name
        if journal_path.exists():
            return journal_path
        return self.pages_dir / file_name

    def page_exists(self, page_name: str) -> bool:
        return self.get_page_path(page_name).exists()
