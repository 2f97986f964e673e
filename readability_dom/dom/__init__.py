"""
DOM implementation used by the readability_dom package.
Documents, elements, text and comment nodes with ordered children and
ordered attributes.
"""

from .node import Node, NodeType
from .element import Element, VOID_ELEMENTS
from .attr import Attr
from .text import Text
from .comment import Comment
from .document import Document, DocumentType

__all__ = [
    'Node', 'NodeType', 'Element', 'VOID_ELEMENTS', 'Attr', 'Text', 'Comment',
    'Document', 'DocumentType'
]
