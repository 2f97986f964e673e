"""
Document implementation for the DOM.
This module implements the DOM Document container and the doctype node.
"""

from typing import Optional

from .node import Node, NodeType
from .element import Element
from .text import Text
from .comment import Comment


class DocumentType(Node):
    """The ``<!DOCTYPE ...>`` node of a document."""

    def __init__(self, name: str, public_id: str = "", system_id: str = "",
                 owner_document: Optional['Document'] = None):
        super().__init__(NodeType.DOCUMENT_TYPE_NODE, owner_document)
        self.name = name or "html"
        self.public_id = public_id or ""
        self.system_id = system_id or ""
        self.node_name = self.name

    def __repr__(self) -> str:
        return f"<DocumentType {self.name!r}>"


class Document(Node):
    """
    Document node implementation for the DOM.

    A document holds at most one root element. Besides the root it may hold
    a doctype and document-level comments. A freshly created document is
    empty; ``DomBuilder`` is what fills one from markup.
    """

    def __init__(self):
        """Initialize a new, empty Document."""
        super().__init__(NodeType.DOCUMENT_NODE)
        self.node_name = "#document"

    @property
    def document_element(self) -> Optional[Element]:
        """The root element, or None if the document is empty."""
        for child in self.child_nodes:
            if child.is_element:
                return child
        return None

    @property
    def doctype(self) -> Optional[DocumentType]:
        for child in self.child_nodes:
            if child.node_type == NodeType.DOCUMENT_TYPE_NODE:
                return child
        return None

    def append_child(self, child: Node) -> Node:
        self._check_document_child(child)
        return super().append_child(child)

    def insert_before(self, new_child: Node, reference_child: Optional[Node] = None) -> Node:
        self._check_document_child(new_child)
        return super().insert_before(new_child, reference_child)

    def replace_child(self, new_child: Node, old_child: Node) -> Node:
        # Swapping the root for another element is allowed
        if new_child.is_element and old_child.is_element:
            return super().replace_child(new_child, old_child)
        self._check_document_child(new_child)
        return super().replace_child(new_child, old_child)

    def _check_document_child(self, child: Node) -> None:
        if child.node_type == NodeType.TEXT_NODE:
            raise ValueError("Text nodes cannot be direct children of a document")

        if child.is_element:
            root = self.document_element
            if root is not None and root is not child:
                raise ValueError("Document already has a root element")

        if child.node_type == NodeType.DOCUMENT_TYPE_NODE:
            doctype = self.doctype
            if doctype is not None and doctype is not child:
                raise ValueError("Document already has a doctype")

    def create_element(self, tag_name: str, namespace: Optional[str] = None) -> Element:
        """
        Create a new element with the specified tag name.

        Args:
            tag_name: The tag name of the element
            namespace: Optional namespace URI

        Returns:
            The new element
        """
        return Element(tag_name, namespace, self)

    def create_text_node(self, data: str) -> Text:
        """
        Create a new text node.

        Args:
            data: The text content

        Returns:
            The new text node
        """
        return Text(data, self)

    def create_comment(self, data: str) -> Comment:
        """
        Create a new comment node.

        Args:
            data: The comment content

        Returns:
            The new comment node
        """
        return Comment(data, self)

    def create_doctype(self, name: str, public_id: str = "", system_id: str = "") -> DocumentType:
        return DocumentType(name, public_id, system_id, self)
