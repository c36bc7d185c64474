"""Content-node tree to flat text.

Hierarchy is discarded in this direction: nodes are emitted in pre-order,
one per line group, without indentation. Trees handed over by a document
store may be arbitrarily deep or contain reference cycles, so every walk
is bounded by a maximum depth and a visited set scoped to the active path.
"""

from typing import Callable, Iterator, Optional

import structlog

from md_outline.lines import CODE_FENCE, HORIZONTAL_RULE, OUTLINE_MARKER
from md_outline.tree import ContentNode

logger = structlog.get_logger()

DEFAULT_MAX_DEPTH = 10


def _identity(node: ContentNode) -> object:
    return node.uuid if node.uuid is not None else id(node)


def walk_forest(
    forest: list[ContentNode],
    max_depth: int = DEFAULT_MAX_DEPTH,
    prune: Optional[Callable[[ContentNode], bool]] = None,
) -> Iterator[tuple[ContentNode, int]]:
    """Walk a forest depth-first in pre-order without recursion.

    A node already on the path from the root is skipped. Children deeper
    than max_depth are dropped. Both cases truncate only the offending
    branch and log a warning.

    Args:
        forest: Root nodes
        max_depth: Deepest depth visited (roots are depth 0)
        prune: Predicate; a matching node is skipped with its subtree

    Yields:
        (node, depth) pairs
    """
    on_path: set[object] = set()
    # (node, depth, leaving): leaving entries remove a node from the path
    worklist: list[tuple[ContentNode, int, bool]] = [
        (node, 0, False) for node in reversed(forest)
    ]

    while worklist:
        node, depth, leaving = worklist.pop()
        key = _identity(node)
        if leaving:
            on_path.discard(key)
            continue
        if key in on_path:
            logger.warning("cycle_detected", node_id=str(key), depth=depth)
            continue
        if prune is not None and prune(node):
            continue

        yield node, depth

        if not node.children:
            continue
        if depth + 1 > max_depth:
            logger.warning(
                "max_depth_exceeded",
                node_id=str(key),
                max_depth=max_depth,
                dropped_children=len(node.children),
            )
            continue
        on_path.add(key)
        worklist.append((node, depth, True))
        worklist.extend((child, depth + 1, False) for child in reversed(node.children))


def _is_horizontal_rule(node: ContentNode) -> bool:
    content = node.content.strip()
    if content.startswith(OUTLINE_MARKER):
        content = content[len(OUTLINE_MARKER):]
    return content.strip() == HORIZONTAL_RULE


def tree_to_markdown(forest: list[ContentNode], max_depth: int = DEFAULT_MAX_DEPTH) -> str:
    """Flatten a content-node forest to Markdown text.

    Leading "- " markers are removed. Horizontal-rule nodes are left out
    together with their children. Inside a code fence, and on nodes that
    contain one, only the marker is removed so code indentation survives.

    Args:
        forest: Root nodes
        max_depth: Traversal depth limit

    Returns:
        One line group per non-empty node, each terminated by a newline
    """
    markdown: list[str] = []
    in_code_block = False

    for node, _depth in walk_forest(forest, max_depth, prune=_is_horizontal_rule):
        if not node.content:
            continue

        content = node.content.strip()
        fences = content.count(CODE_FENCE)
        has_fence = fences > 0
        # A node holding a whole code block opens and closes the fence
        if fences % 2:
            in_code_block = not in_code_block

        if content.startswith(OUTLINE_MARKER):
            content = content[len(OUTLINE_MARKER):]
            if not (in_code_block or has_fence):
                content = content.strip()

        markdown.append(content + "\n")

    return "".join(markdown)


def extract_content(forest: list[ContentNode], max_depth: int = DEFAULT_MAX_DEPTH) -> str:
    """Concatenate node contents in pre-order, dropping a leading bullet.

    Unlike tree_to_markdown nothing else is trimmed or filtered; this is the
    raw page text handed to the Markdown to outline conversion.

    Args:
        forest: Root nodes
        max_depth: Traversal depth limit

    Returns:
        Node contents, each followed by a newline
    """
    text: list[str] = []
    for node, _depth in walk_forest(forest, max_depth):
        if not node.content:
            continue
        content = node.content
        if content.startswith(OUTLINE_MARKER):
            content = content[len(OUTLINE_MARKER):]
        text.append(content + "\n")
    return "".join(text)
