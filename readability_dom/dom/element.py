"""
Element implementation for the DOM.
This module implements the DOM Element interface with an ordered attribute map.
"""

from typing import Dict, List, Optional, Tuple
from .node import Node, NodeType
from .attr import Attr

# Elements that never have content or an end tag in HTML
VOID_ELEMENTS = frozenset({
    'area', 'base', 'br', 'col', 'embed', 'hr', 'img', 'input',
    'link', 'meta', 'param', 'source', 'track', 'wbr'
})


class Element(Node):
    """
    Element node implementation for the DOM.

    ``attributes`` maps the stored attribute name to its ``Attr``, in
    document order. An absent attribute and an attribute whose value is the
    empty string are different states.
    """

    def __init__(self,
                 tag_name: str,
                 namespace: Optional[str] = None,
                 owner_document: Optional['Document'] = None):
        """
        Initialize a new Element.

        Args:
            tag_name: Name of the element tag (e.g., "div", "span"), case preserved
            namespace: Optional namespace URI
            owner_document: The document that owns this element
        """
        super().__init__(NodeType.ELEMENT_NODE, owner_document)

        self.tag_name = tag_name
        self.namespace_uri = namespace
        self.node_name = tag_name

        self.attributes: Dict[str, Attr] = {}

    @property
    def local_name(self) -> str:
        """Tag name without a namespace prefix."""
        return self.tag_name.split(':', 1)[-1]

    @property
    def is_void_element(self) -> bool:
        return self.tag_name.lower() in VOID_ELEMENTS

    def has_tag_name(self, tag_name: str) -> bool:
        """Compare this element's local name with ``tag_name`` ignoring case."""
        return self.local_name.lower() == tag_name.lower()

    def _find_attribute_key(self, name: str) -> Optional[str]:
        if name in self.attributes:
            return name

        lowered = name.lower()
        for key in self.attributes:
            if key.lower() == lowered:
                return key

        return None

    def has_attribute(self, name: str) -> bool:
        """
        Check if the element has the specified attribute.

        Args:
            name: The attribute name (case-insensitive)

        Returns:
            True if the attribute exists, False otherwise
        """
        return self._find_attribute_key(name) is not None

    def get_attribute(self, name: str) -> Optional[str]:
        """
        Get the value of an attribute.

        Args:
            name: The attribute name (case-insensitive)

        Returns:
            The attribute value, or None if the attribute doesn't exist
        """
        key = self._find_attribute_key(name)
        return self.attributes[key].value if key is not None else None

    def get_attribute_node(self, name: str) -> Optional[Attr]:
        """
        Get an attribute node.

        Args:
            name: The attribute name (case-insensitive)

        Returns:
            The attribute node, or None if the attribute doesn't exist
        """
        key = self._find_attribute_key(name)
        return self.attributes[key] if key is not None else None

    def set_attribute(self, name: str, value: str) -> None:
        """
        Set an attribute value.

        An existing attribute keeps its position and stored name; a new one
        is appended after the existing attributes.

        Args:
            name: The attribute name
            value: The attribute value
        """
        if value is None:
            raise ValueError("Attribute value cannot be None, use remove_attribute()")

        key = self._find_attribute_key(name)
        if key is not None:
            self.attributes[key].value = value
        else:
            self.attributes[name] = Attr(name, value, self)

    def remove_attribute(self, name: str) -> None:
        """
        Remove an attribute. Removing an absent attribute does nothing.

        Args:
            name: The attribute name (case-insensitive)
        """
        key = self._find_attribute_key(name)
        if key is not None:
            attr = self.attributes.pop(key)
            attr.owner_element = None

    def has_attributes(self) -> bool:
        """Check if the element has any attributes."""
        return bool(self.attributes)

    def attribute_items(self) -> List[Tuple[str, str]]:
        """Get (name, value) pairs in attribute order."""
        return [(attr.name, attr.value) for attr in self.attributes.values()]

    def __repr__(self) -> str:
        return f"<Element {self.tag_name!r} attributes={len(self.attributes)}>"
