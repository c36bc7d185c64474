"""Outline text to content-node tree.

Outline form expresses hierarchy only through leading tabs. Parsing it line
by line would split code blocks and tables, so those atomic spans are
re-grouped into a single node before the tree is built.
"""

from dataclasses import dataclass, field
from typing import Iterator, Optional, Protocol

from md_outline.lines import (
    TABLE_DELIMITER,
    is_code_fence,
    outline_indent,
    strip_outline_prefix,
)


@dataclass
class ContentNode:
    """A node of a document tree.

    Attributes:
        content: Node text, possibly multi-line (code blocks, tables)
        children: Child nodes in document order
        uuid: Identity assigned by the document store (None until stored)
    """

    content: str
    children: list["ContentNode"] = field(default_factory=list)
    uuid: Optional[str] = None

    def add_child(self, content: str) -> "ContentNode":
        child = ContentNode(content=content)
        self.children.append(child)
        return child

    def iter_tree(self) -> Iterator["ContentNode"]:
        """Yield this node and all descendants in pre-order."""
        yield self
        for child in self.children:
            yield from child.iter_tree()


@dataclass(frozen=True)
class OutlineItem:
    """One outline entry after atomic spans have been re-grouped."""

    indent_level: int
    content: str


class NodeCreator(Protocol):
    """Capability to create a node in an external document store."""

    async def create_node(
        self, target_id: str, content: str, sibling_of_previous: bool = False
    ) -> str:
        ...


class MaterializationError(Exception):
    """Raised when node creation fails part way through a forest.

    Nodes created before the failure are left in place.

    Attributes:
        created_ids: Identities of the nodes created before the failure
    """

    def __init__(self, message: str, created_ids: list[str]):
        self.created_ids = created_ids
        super().__init__(message)


def iter_outline_items(outline_text: str) -> Iterator[OutlineItem]:
    """Split outline text into items, keeping code blocks and tables whole.

    Blank lines are skipped. A line opening a code fence absorbs every raw
    line up to and including the closing fence; interior lines are kept
    byte-for-byte and the closing fence loses its structural tabs. A line
    containing "|" absorbs the following lines that still contain "|" once
    their outline prefix is removed.

    Args:
        outline_text: Tab-indented outline text

    Yields:
        OutlineItem per outline entry, in document order
    """
    lines = outline_text.split("\n")
    i = 0
    while i < len(lines):
        line = lines[i]
        i += 1
        if not line.strip():
            continue

        indent_level = outline_indent(line)
        content = strip_outline_prefix(line)
        if not content:
            continue

        if is_code_fence(content):
            parts = [content]
            while i < len(lines):
                code_line = lines[i]
                i += 1
                if is_code_fence(code_line.strip()):
                    parts.append(code_line.strip())
                    break
                parts.append(code_line)
            content = "\n".join(parts).rstrip()
        elif TABLE_DELIMITER in content:
            rows = [content]
            while i < len(lines):
                row = strip_outline_prefix(lines[i])
                if not row or TABLE_DELIMITER not in row:
                    break
                rows.append(row)
                i += 1
            content = "\n".join(rows)

        yield OutlineItem(indent_level=indent_level, content=content)


def parse_outline(outline_text: str) -> list[ContentNode]:
    """Build a forest of content nodes from outline text.

    Each item becomes the last child of the nearest open item one tab
    shallower. An item indented deeper than any open ancestor has no parent
    and is attached at the root instead of being dropped.

    Args:
        outline_text: Tab-indented outline text

    Returns:
        Root nodes in document order

    Examples:
        >>> roots = parse_outline("# A\\n\\t- ## B\\n\\t\\t- text")
        >>> roots[0].children[0].children[0].content
        'text'
    """
    roots: list[ContentNode] = []
    # Open node per depth; holes appear after lenient root attachment
    open_nodes: list[Optional[ContentNode]] = []

    for item in iter_outline_items(outline_text):
        level = item.indent_level
        del open_nodes[level:]

        parent = open_nodes[level - 1] if 0 < level <= len(open_nodes) else None
        if parent is None:
            node = ContentNode(content=item.content)
            roots.append(node)
        else:
            node = parent.add_child(item.content)

        open_nodes.extend([None] * (level - len(open_nodes)))
        open_nodes.append(node)

    return roots


async def materialize(
    forest: list[ContentNode], creator: NodeCreator, document_id: str
) -> list[str]:
    """Create every node of a forest in an external store.

    Creation is strictly sequential in pre-order: a child is created only
    once its parent's identity is known. Root nodes are created against the
    document; every root after the first is flagged as a sibling of the
    previous one. Each node's uuid is set to the identity returned.

    Args:
        forest: Root nodes to create
        creator: Store capability used for node creation
        document_id: Identity of the document receiving the root nodes

    Returns:
        Created identities in creation order

    Raises:
        MaterializationError: If the store fails; earlier nodes stay created
    """
    created: list[str] = []
    worklist: list[tuple[ContentNode, str, bool]] = [
        (node, document_id, index > 0) for index, node in enumerate(forest)
    ]
    worklist.reverse()

    while worklist:
        node, target_id, sibling = worklist.pop()
        try:
            node.uuid = await creator.create_node(
                target_id, node.content, sibling_of_previous=sibling
            )
        except Exception as e:
            raise MaterializationError(
                f"Failed to create node after {len(created)} node(s): {e}", created
            ) from e
        created.append(node.uuid)
        worklist.extend((child, node.uuid, False) for child in reversed(node.children))

    return created
