"""Shared test fixtures for all test modules."""

from textwrap import dedent

import pytest

from mdseq.logseq.graph import GraphPaths


@pytest.fixture
def graph_dir(tmp_path):
    """Create an empty Logseq graph with pages/ and journals/ directories."""
    graph_path = tmp_path / "graph"
    (graph_path / "pages").mkdir(parents=True)
    (graph_path / "journals").mkdir()
    return graph_path


@pytest.fixture
def graph_paths(graph_dir):
    return GraphPaths(graph_dir)


@pytest.fixture
def write_page(graph_dir):
    """Write a page file into the graph and return its path."""

    def _write(name: str, text: str):
        path = graph_dir / "pages" / f"{name.replace('/', '___')}.md"
        path.write_text(dedent(text), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def markdown_page_text():
    """Logseq page whose blocks hold a flat Markdown document."""
    return (
        "- # Guide\n"
        "- ## Install\n"
        "- Run the installer.\n"
        "- **注意**：\n"
        "- Needs admin rights.\n"
        "- ## Usage\n"
        "- ```sh\n"
        "  mdseq --help\n"
        "  ```\n"
        "- | flag | meaning |\n"
        "  |---|---|\n"
        "  | -h | help |\n"
    )
