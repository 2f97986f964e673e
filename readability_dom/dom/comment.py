"""
Comment node implementation for the DOM.
"""

from typing import Optional
from .node import Node, NodeType


class Comment(Node):
    """
    Comment node implementation for the DOM.

    This class represents a comment node in the DOM tree.
    """

    def __init__(self, data: str, owner_document: Optional['Document'] = None):
        """
        Initialize a comment node.

        Args:
            data: The comment text, without the ``<!--``/``-->`` delimiters
            owner_document: The document that owns this node
        """
        super().__init__(NodeType.COMMENT_NODE, owner_document)

        self.node_name = "#comment"
        self.data = data if data is not None else ""

    @property
    def data(self) -> str:
        return self.node_value

    @data.setter
    def data(self, value: str) -> None:
        self.node_value = value if value is not None else ""

    @property
    def text_content(self) -> str:
        return self.node_value

    def __repr__(self) -> str:
        return f"<Comment {self.data[:30]!r}>"
