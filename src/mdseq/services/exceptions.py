"""Custom exceptions for mdseq services."""


class MdseqError(Exception):
    """Base class for errors raised by the document store and presenters."""


class DocumentNotFoundError(MdseqError):
    """Raised when a page does not exist in the graph.

    Attributes:
        document_id: Name of the missing page
    """

    def __init__(self, document_id: str):
        self.document_id = document_id
        super().__init__(f"Page not found: {document_id}")


class NodeNotFoundError(MdseqError):
    """Raised when a block id is not known to the document store.

    Attributes:
        node_id: The unknown block id
    """

    def __init__(self, node_id: str):
        self.node_id = node_id
        super().__init__(f"Block not found: {node_id}")


class ClipboardError(MdseqError):
    """Raised when the system clipboard cannot be used."""
