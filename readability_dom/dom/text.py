"""
Text node implementation for the DOM.
"""

from typing import Optional
from .node import Node, NodeType


class Text(Node):
    """
    Text node implementation for the DOM.

    ``data`` holds the unescaped character data.
    """

    def __init__(self, data: str, owner_document: Optional['Document'] = None):
        """
        Initialize a text node.

        Args:
            data: The text content
            owner_document: The document that owns this node
        """
        super().__init__(NodeType.TEXT_NODE, owner_document)

        self.node_name = "#text"
        self.data = data if data is not None else ""

    @property
    def data(self) -> str:
        return self.node_value

    @data.setter
    def data(self, value: str) -> None:
        self.node_value = value if value is not None else ""

    @property
    def length(self) -> int:
        return len(self.node_value)

    @property
    def text_content(self) -> str:
        """Get the text content of this text node."""
        return self.node_value

    def append_data(self, data: str) -> None:
        """
        Append data to the end of the text node.

        Args:
            data: Data to append
        """
        self.data = self.data + data

    def __repr__(self) -> str:
        return f"<Text {self.data[:30]!r}>"
