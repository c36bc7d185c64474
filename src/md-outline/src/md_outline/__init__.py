"""Markdown outline converter - Convert Markdown documents to and from outline form.

This package converts flat Markdown (headings, pseudo-headings, code blocks,
tables) into the tab-indented bullet outline used by block outliners such as
Logseq, and turns outline text or a stored block tree back into text.

Key features:
- Infer nesting depth from real headings and bold/code pseudo-headings
- Keep code blocks and tables intact as single outline items
- Rebuild a content-node tree from outline indentation
- Flatten a content-node tree back to Markdown with depth and cycle guards

Example:
    >>> from md_outline import convert_to_outline, parse_outline, tree_to_markdown
    >>> outline = convert_to_outline("# Title\\n## Section\\nSome text")
    >>> forest = parse_outline(outline)
    >>> tree_to_markdown(forest)
    '# Title\\n## Section\\nSome text\\n'
"""

from md_outline.classifier import OutlineLine, convert_to_outline, iter_outline_lines
from md_outline.flatten import extract_content, tree_to_markdown, walk_forest
from md_outline.tree import (
    ContentNode,
    MaterializationError,
    NodeCreator,
    materialize,
    parse_outline,
)

__version__ = "0.1.0"

__all__ = [
    "OutlineLine",
    "convert_to_outline",
    "iter_outline_lines",
    "ContentNode",
    "MaterializationError",
    "NodeCreator",
    "materialize",
    "parse_outline",
    "extract_content",
    "tree_to_markdown",
    "walk_forest",
]
