"""
Attr implementation for the DOM.
This module implements the DOM Attr interface as described by the DOM standard.
"""

from typing import Optional


class Attr:
    """
    Attribute of an Element node.

    The name keeps the case it was created with; lookups on the owning
    element compare names case-insensitively.
    """

    def __init__(self, name: str, value: str, owner_element: Optional['Element'] = None):
        """
        Initialize a new attribute.

        Args:
            name: The attribute name
            value: The attribute value
            owner_element: The element that owns this attribute
        """
        self.name = name
        self.value = value
        self.owner_element = owner_element

        self.prefix: Optional[str] = None
        self.local_name = name

        # Handle namespaced attributes (xlink:href, xml:lang, ...)
        if ':' in name:
            self.prefix, self.local_name = name.split(':', 1)

    def __repr__(self) -> str:
        return f"Attr({self.name!r}, {self.value!r})"
