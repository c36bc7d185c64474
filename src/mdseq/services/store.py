"""Document store backed by a Logseq graph directory.

Conversions talk to the store through the DocumentStore protocol, so the
core transforms never touch the graph directly and tests can substitute
any object with the same coroutine methods.
"""

import asyncio
import copy
import uuid
from dataclasses import dataclass
from typing import Optional, Protocol

import structlog

from md_outline.tree import ContentNode
from mdseq.logseq.graph import GraphPaths
from mdseq.logseq.page import PageFile, parse_page, render_page
from mdseq.models.document import Document
from mdseq.services.exceptions import DocumentNotFoundError, NodeNotFoundError
from mdseq.services.file_operations import atomic_write

logger = structlog.get_logger()


class DocumentStore(Protocol):
    """Host document API used by the conversion commands."""

    async def fetch_current_document(self) -> Optional[Document]:
        ...

    async def fetch_block_forest(self, document_id: str) -> Optional[list[ContentNode]]:
        ...

    async def delete_node(self, node_id: str) -> None:
        ...

    async def create_node(
        self, target_id: str, content: str, sibling_of_previous: bool = False
    ) -> str:
        ...


@dataclass
class _LoadedPage:
    document: Document
    page: PageFile


@dataclass
class _NodeRef:
    page_name: str
    node: ContentNode
    parent: Optional[ContentNode]


class GraphDocumentStore:
    """DocumentStore over the page files of a Logseq graph.

    Pages are parsed on first access and cached. Every mutation is written
    back to the page file immediately, so a failed sequence of mutations
    leaves the earlier ones on disk.

    Example:
        >>> store = GraphDocumentStore(GraphPaths(graph_dir), current_page="Notes")
        >>> document = await store.fetch_current_document()
        >>> forest = await store.fetch_block_forest(document.id)
    """

    def __init__(self, graph_paths: GraphPaths, current_page: Optional[str] = None):
        """Initialize store.

        Args:
            graph_paths: Graph directory helper
            current_page: Page treated as the current document
        """
        self.graph_paths = graph_paths
        self.current_page = current_page
        self._pages: dict[str, _LoadedPage] = {}
        self._nodes: dict[str, _NodeRef] = {}

    async def fetch_current_document(self) -> Optional[Document]:
        if not self.current_page or not self.graph_paths.page_exists(self.current_page):
            logger.info("current_page_missing", page=self.current_page)
            return None
        return Document(
            name=self.current_page,
            path=self.graph_paths.get_page_path(self.current_page),
        )

    async def fetch_block_forest(self, document_id: str) -> Optional[list[ContentNode]]:
        """Return a copy of a page's block tree.

        Args:
            document_id: Page name

        Returns:
            Root blocks, or None if the page does not exist
        """
        try:
            loaded = self._load(document_id)
        except DocumentNotFoundError:
            return None
        return copy.deepcopy(loaded.page.blocks)

    async def delete_node(self, node_id: str) -> None:
        """Remove a block and its children from its page.

        Raises:
            NodeNotFoundError: If node_id is unknown
        """
        ref = self._resolve(node_id)
        loaded = self._pages[ref.page_name]
        siblings = ref.parent.children if ref.parent else loaded.page.blocks
        siblings.remove(ref.node)

        for node in ref.node.iter_tree():
            self._nodes.pop(node.uuid, None)

        logger.debug("node_deleted", page=ref.page_name, node_id=node_id)
        await self._save(loaded)

    async def create_node(
        self, target_id: str, content: str, sibling_of_previous: bool = False
    ) -> str:
        """Insert a block and return its id.

        A page-name target appends a root block. A block-id target appends a
        last child, or inserts right after that block when
        sibling_of_previous is set.

        Args:
            target_id: Page name or block id
            content: Block content, may span lines
            sibling_of_previous: Insert next to target_id instead of under it

        Returns:
            Id of the new block

        Raises:
            DocumentNotFoundError: If target_id is neither a block nor a page
        """
        node = ContentNode(content=content, uuid=str(uuid.uuid4()))

        if target_id in self._nodes:
            target = self._nodes[target_id]
            loaded = self._pages[target.page_name]
            if sibling_of_previous:
                parent = target.parent
                siblings = parent.children if parent else loaded.page.blocks
                siblings.insert(siblings.index(target.node) + 1, node)
            else:
                parent = target.node
                parent.children.append(node)
        else:
            loaded = self._load(target_id)
            parent = None
            loaded.page.blocks.append(node)

        self._nodes[node.uuid] = _NodeRef(loaded.document.name, node, parent)
        logger.debug("node_created", page=loaded.document.name, node_id=node.uuid)
        await self._save(loaded)
        return node.uuid

    def _resolve(self, node_id: str) -> _NodeRef:
        try:
            return self._nodes[node_id]
        except KeyError:
            raise NodeNotFoundError(node_id) from None

    def _load(self, page_name: str) -> _LoadedPage:
        if page_name in self._pages:
            return self._pages[page_name]

        if not self.graph_paths.page_exists(page_name):
            raise DocumentNotFoundError(page_name)

        path = self.graph_paths.get_page_path(page_name)
        page = parse_page(path.read_text(encoding="utf-8"))
        loaded = _LoadedPage(document=Document(name=page_name, path=path), page=page)
        self._pages[page_name] = loaded

        worklist = [(block, None) for block in page.blocks]
        while worklist:
            node, parent = worklist.pop()
            self._nodes[node.uuid] = _NodeRef(page_name, node, parent)
            worklist.extend((child, node) for child in node.children)

        logger.info("page_loaded", page=page_name, path=str(path), blocks=len(page.blocks))
        return loaded

    async def _save(self, loaded: _LoadedPage) -> None:
        await asyncio.to_thread(atomic_write, loaded.document.path, render_page(loaded.page))
