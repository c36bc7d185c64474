"""Conversion commands for the current page.

Each command fetches the current page from the document store, runs one of
the pure transforms and hands the result to the presenter. Missing input
aborts with a message before any transform runs; store and clipboard
failures are reported with their underlying message.
"""

from typing import Optional

import structlog

from md_outline import (
    MaterializationError,
    convert_to_outline,
    extract_content,
    materialize,
    parse_outline,
    tree_to_markdown,
)
from md_outline.flatten import DEFAULT_MAX_DEPTH
from md_outline.tree import ContentNode
from mdseq.models.document import Document
from mdseq.services.messaging import MessageLevel, Notifier
from mdseq.services.presenter import ResultPresenter
from mdseq.services.store import DocumentStore

logger = structlog.get_logger()

MARKDOWN_RESULT_KEY = "markdown-result"
CONVERTED_RESULT_KEY = "converted-result"


class ConversionService:
    """Page-level Markdown and outline conversions.

    Example:
        >>> service = ConversionService(store, ConsoleNotifier(), ConsolePresenter())
        >>> outline = await service.process_current_page()
        >>> await service.replace_current_page(outline)
    """

    def __init__(
        self,
        store: DocumentStore,
        notifier: Notifier,
        presenter: ResultPresenter,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ):
        self.store = store
        self.notifier = notifier
        self.presenter = presenter
        self.max_depth = max_depth

    async def _load_current_page(self) -> Optional[tuple[Document, list[ContentNode]]]:
        document = await self.store.fetch_current_document()
        if document is None:
            self.notifier.notify("No current page found", MessageLevel.ERROR)
            return None

        forest = await self.store.fetch_block_forest(document.id)
        if not forest:
            self.notifier.notify(f"Page '{document.name}' has no content", MessageLevel.WARNING)
            return None

        return document, forest

    async def convert_to_markdown(self) -> Optional[str]:
        """Flatten the current page's blocks to Markdown and show the result.

        Returns:
            Markdown text, or None if the command aborted
        """
        self.notifier.notify("Converting page to Markdown...", MessageLevel.INFO)
        try:
            loaded = await self._load_current_page()
            if loaded is None:
                return None
            document, forest = loaded

            markdown = tree_to_markdown(forest, max_depth=self.max_depth)
            self.presenter.show(MARKDOWN_RESULT_KEY, f"Markdown: {document.name}", markdown)
        except Exception as e:
            logger.error("convert_to_markdown_failed", error=str(e))
            self.notifier.notify(f"Conversion failed: {e}", MessageLevel.ERROR)
            return None

        logger.info("convert_to_markdown_completed", page=document.name, size=len(markdown))
        self.notifier.notify("Converted to Markdown", MessageLevel.SUCCESS)
        return markdown

    async def process_current_page(self) -> Optional[str]:
        """Convert the current page's text to outline form and show the result.

        Returns:
            Outline text, or None if the command aborted
        """
        self.notifier.notify("Processing current page...", MessageLevel.INFO)
        try:
            loaded = await self._load_current_page()
            if loaded is None:
                return None
            document, forest = loaded

            page_content = extract_content(forest, max_depth=self.max_depth)
            if not page_content.strip():
                self.notifier.notify(f"Page '{document.name}' is empty", MessageLevel.WARNING)
                return None

            converted = convert_to_outline(page_content)
            logger.debug("outline_converted", page=document.name, outline=converted)
            self.presenter.show(CONVERTED_RESULT_KEY, f"Outline: {document.name}", converted)
        except Exception as e:
            logger.error("process_page_failed", error=str(e))
            self.notifier.notify(f"Processing failed: {e}", MessageLevel.ERROR)
            return None

        logger.info("process_page_completed", page=document.name, lines=converted.count("\n") + 1)
        self.notifier.notify("Conversion complete", MessageLevel.SUCCESS)
        return converted

    async def replace_current_page(self, converted: str) -> bool:
        """Overwrite the current page with blocks built from outline text.

        Existing root blocks are deleted first, then the outline is
        materialized node by node. A failure part way leaves the blocks
        created so far in place.

        Args:
            converted: Outline text (as produced by process_current_page)

        Returns:
            True if the page was replaced
        """
        if not converted.strip():
            self.notifier.notify("Nothing to write: converted content is empty", MessageLevel.ERROR)
            return False

        try:
            document = await self.store.fetch_current_document()
            if document is None:
                self.notifier.notify("No current page found", MessageLevel.ERROR)
                return False

            existing = await self.store.fetch_block_forest(document.id) or []
            for block in existing:
                await self.store.delete_node(block.uuid)
            logger.info("page_cleared", page=document.name, removed=len(existing))

            forest = parse_outline(converted)
            created = await materialize(forest, self.store, document.id)
        except MaterializationError as e:
            logger.error(
                "page_replace_partial",
                created=len(e.created_ids),
                error=str(e),
            )
            self.notifier.notify(f"Replace failed: {e}", MessageLevel.ERROR)
            return False
        except Exception as e:
            logger.error("page_replace_failed", error=str(e))
            self.notifier.notify(f"Replace failed: {e}", MessageLevel.ERROR)
            return False

        self.presenter.dismiss(CONVERTED_RESULT_KEY)
        logger.info("page_replaced", page=document.name, created=len(created))
        self.notifier.notify(f"Page '{document.name}' replaced", MessageLevel.SUCCESS)
        return True

    def copy_result(self, content: str) -> bool:
        """Copy a result to the clipboard.

        Returns:
            True if the content was copied
        """
        try:
            self.presenter.copy(content)
        except Exception as e:
            logger.error("clipboard_copy_failed", error=str(e))
            self.notifier.notify(f"Copy failed: {e}", MessageLevel.ERROR)
            return False

        self.notifier.notify("Copied to clipboard", MessageLevel.SUCCESS)
        return True
