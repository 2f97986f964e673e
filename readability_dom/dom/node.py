"""
Node implementation for the DOM.
This module implements the structural part of the DOM Node interface:
parent/child/sibling links and document-order traversal.
"""

from enum import IntEnum
from typing import List, Optional, Iterator


class NodeType(IntEnum):
    """Node types as numbered by the DOM standard."""
    ELEMENT_NODE = 1
    ATTRIBUTE_NODE = 2
    TEXT_NODE = 3
    CDATA_SECTION_NODE = 4
    PROCESSING_INSTRUCTION_NODE = 7
    COMMENT_NODE = 8
    DOCUMENT_NODE = 9
    DOCUMENT_TYPE_NODE = 10
    DOCUMENT_FRAGMENT_NODE = 11


class Node:
    """
    Base Node implementation for the DOM.

    Parent and sibling references are navigation links only; a node is owned
    by whichever container currently lists it in ``child_nodes``.
    """

    def __init__(self, node_type: NodeType, owner_document: Optional['Document'] = None):
        """
        Initialize a new Node.

        Args:
            node_type: The type of this node
            owner_document: The document that owns this node
        """
        self.node_type = node_type
        self.owner_document = owner_document

        # Node relationships
        self.parent_node: Optional['Node'] = None
        self.child_nodes: List['Node'] = []
        self.first_child: Optional['Node'] = None
        self.last_child: Optional['Node'] = None
        self.previous_sibling: Optional['Node'] = None
        self.next_sibling: Optional['Node'] = None

        self.node_name: str = "#node"
        self.node_value: Optional[str] = None

    @property
    def is_element(self) -> bool:
        return self.node_type == NodeType.ELEMENT_NODE

    @property
    def child_element_count(self) -> int:
        """Get the number of child elements."""
        return sum(1 for child in self.child_nodes if child.is_element)

    @property
    def children(self) -> List['Element']:
        """Get a list of child elements."""
        return [child for child in self.child_nodes if child.is_element]

    def append_child(self, child: 'Node') -> 'Node':
        """
        Append a child node to this node.

        Args:
            child: The node to append

        Returns:
            The appended node
        """
        self._check_insertable(child)

        # If child already has a parent, remove it first
        if child.parent_node is not None:
            child.parent_node.remove_child(child)

        child.parent_node = self

        if self.child_nodes:
            last_child = self.child_nodes[-1]
            last_child.next_sibling = child
            child.previous_sibling = last_child

        self.child_nodes.append(child)

        if self.first_child is None:
            self.first_child = child
        self.last_child = child

        return child

    def insert_before(self, new_child: 'Node', reference_child: Optional['Node'] = None) -> 'Node':
        """
        Insert a node before a reference node.

        Args:
            new_child: The node to insert
            reference_child: The reference node to insert before, or None to append

        Returns:
            The inserted node
        """
        if reference_child is None:
            return self.append_child(new_child)

        if reference_child.parent_node is not self:
            raise ValueError("Reference child not found in child nodes")

        if new_child is reference_child:
            return new_child

        self._check_insertable(new_child)

        if new_child.parent_node is not None:
            new_child.parent_node.remove_child(new_child)

        new_child.parent_node = self

        index = self._index_of(reference_child)
        prev_sibling = reference_child.previous_sibling

        new_child.next_sibling = reference_child
        new_child.previous_sibling = prev_sibling
        reference_child.previous_sibling = new_child

        if prev_sibling is not None:
            prev_sibling.next_sibling = new_child

        self.child_nodes.insert(index, new_child)

        if index == 0:
            self.first_child = new_child

        return new_child

    def remove_child(self, child: 'Node') -> 'Node':
        """
        Remove a child node from this node.

        Args:
            child: The node to remove

        Returns:
            The removed node
        """
        if child.parent_node is not self:
            raise ValueError("Child not found in child nodes")

        prev_sibling = child.previous_sibling
        next_sibling = child.next_sibling

        if prev_sibling is not None:
            prev_sibling.next_sibling = next_sibling

        if next_sibling is not None:
            next_sibling.previous_sibling = prev_sibling

        if self.first_child is child:
            self.first_child = next_sibling

        if self.last_child is child:
            self.last_child = prev_sibling

        del self.child_nodes[self._index_of(child)]

        child.parent_node = None
        child.previous_sibling = None
        child.next_sibling = None

        return child

    def replace_child(self, new_child: 'Node', old_child: 'Node') -> 'Node':
        """
        Replace a child node with another node.

        Args:
            new_child: The replacement node
            old_child: The node to replace

        Returns:
            The replaced node
        """
        if old_child.parent_node is not self:
            raise ValueError("Old child not found in child nodes")

        if new_child is old_child:
            return old_child

        reference = old_child.next_sibling
        self.remove_child(old_child)

        # The replacement may itself be the old node's next sibling
        if reference is new_child:
            reference = new_child.next_sibling

        self.insert_before(new_child, reference)

        return old_child

    def remove_all_children(self) -> None:
        """Detach every child node, leaving this node empty."""
        for child in list(self.child_nodes):
            self.remove_child(child)

    def has_child_nodes(self) -> bool:
        """Check if this node has any child nodes."""
        return len(self.child_nodes) > 0

    def contains(self, other: Optional['Node']) -> bool:
        """
        Check if this node contains another node.

        Args:
            other: The node to check

        Returns:
            True if this node is ``other`` or one of its ancestors
        """
        current = other
        while current is not None:
            if current is self:
                return True
            current = current.parent_node

        return False

    def iter_descendants(self) -> Iterator['Node']:
        """
        Iterate over all descendant nodes in document order (pre-order).

        The walk is iterative so deeply nested real-world markup cannot hit
        the recursion limit.
        """
        stack = list(reversed(self.child_nodes))
        while stack:
            node = stack.pop()
            yield node
            if node.child_nodes:
                stack.extend(reversed(node.child_nodes))

    def iter_descendant_elements(self) -> Iterator['Element']:
        """Iterate over descendant elements in document order."""
        for node in self.iter_descendants():
            if node.is_element:
                yield node

    @property
    def text_content(self) -> str:
        """
        Get the text content of this node and all its descendants.

        Returns:
            The concatenated data of every descendant text node
        """
        return "".join(
            node.node_value or ""
            for node in self.iter_descendants()
            if node.node_type == NodeType.TEXT_NODE
        )

    def _index_of(self, child: 'Node') -> int:
        # list.index compares with ==, identity is what matters here
        for index, node in enumerate(self.child_nodes):
            if node is child:
                return index
        raise ValueError("Child not found in child nodes")

    def _check_insertable(self, child: 'Node') -> None:
        if child.contains(self):
            raise ValueError("Cannot insert a node into itself or one of its descendants")
        if child.node_type == NodeType.DOCUMENT_NODE:
            raise ValueError("A document cannot be inserted as a child node")
