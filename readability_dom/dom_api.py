"""
Query and attribute helpers used by content-extraction code.

All functions work on trees built by ``DomBuilder``. Tag and attribute
names are matched case-insensitively; results keep document order. ``None``
is the "no value" sentinel: passing it to a setter removes the attribute.
"""

import logging
from typing import List, Optional

from .dom import Document, Element, Node
from .errors import AmbiguousLookupError, InvalidArgumentError
from .parser import HTMLParser, create_parser
from .serializer import serialize_nodes
from .utils.config import Config

logger = logging.getLogger(__name__)


def _require_node(node, argument: str) -> None:
    if node is None:
        raise InvalidArgumentError(argument)


def _require_name(name: str, argument: str) -> None:
    if not name:
        raise InvalidArgumentError(argument)


# Document helpers

def get_body(document: Document) -> Optional[Element]:
    """Return the first ``body`` element of the document, or None."""
    _require_node(document, "document")

    root = document.document_element
    if root is None:
        return None

    return next(_iter_elements_by_tag_name(root, "body"), None)


def get_title(document: Document) -> str:
    """
    Return the trimmed text of the first ``title`` child of ``head``.

    Empty string when the document has no root, no ``head`` or no ``title``.
    """
    _require_node(document, "document")

    root = document.document_element
    if root is None:
        return ""

    head = next(_iter_elements_by_tag_name(root, "head"), None)
    if head is None:
        return ""

    title = next(iter(get_children_by_tag_name(head, "title")), None)
    if title is None:
        return ""

    return title.text_content.strip()


def get_element_by_id(document: Document, element_id: str) -> Optional[Element]:
    """
    Return the element whose ``id`` attribute equals ``element_id``.

    The value comparison is case-sensitive. Ids are not required to be
    unique in a parsed document, but this lookup is: several matches raise
    ``AmbiguousLookupError`` rather than picking one.
    """
    _require_node(document, "document")
    _require_name(element_id, "element_id")

    matches = [
        element for element in document.iter_descendant_elements()
        if element.get_attribute("id") == element_id
    ]

    if len(matches) > 1:
        raise AmbiguousLookupError(element_id, len(matches))

    return matches[0] if matches else None


# Attribute helpers

def get_attribute(element: Element, name: str, default: Optional[str]) -> Optional[str]:
    """Return the attribute value, or ``default`` when the attribute is absent."""
    _require_node(element, "element")
    _require_name(name, "name")

    value = element.get_attribute(name)
    return value if value is not None else default


def set_attribute(element: Element, name: str, value: Optional[str]) -> None:
    """
    Set an attribute, keeping its position if it already exists.

    A ``None`` value removes the attribute; removing an absent one is a no-op.
    """
    _require_node(element, "element")
    _require_name(name, "name")

    if value is None:
        element.remove_attribute(name)
    else:
        element.set_attribute(name, value)


def get_id(element: Element) -> str:
    return get_attribute(element, "id", "")


def set_id(element: Element, value: Optional[str]) -> None:
    set_attribute(element, "id", value)


def get_class(element: Element) -> str:
    return get_attribute(element, "class", "")


def set_class(element: Element, value: Optional[str]) -> None:
    set_attribute(element, "class", value)


def get_style(element: Element) -> str:
    return get_attribute(element, "style", "")


def set_style(element: Element, value: Optional[str]) -> None:
    set_attribute(element, "style", value)


def get_attributes_string(element: Element, separator: str) -> str:
    """
    Join the non-empty attribute values of ``element`` with ``separator``.

    Empty values are skipped entirely, so they never produce an empty
    segment or a doubled separator.
    """
    _require_node(element, "element")
    if separator is None:
        raise InvalidArgumentError("separator")

    return separator.join(value for _, value in element.attribute_items() if value)


# Markup helpers

def get_inner_markup(node: Node) -> str:
    """
    Serialize the children of ``node``, not the node itself.

    Every non-void element gets an explicit end tag, also when empty.
    """
    _require_node(node, "node")
    return serialize_nodes(node.child_nodes)


def get_outer_markup(node: Node) -> str:
    """Serialize ``node`` together with its descendants."""
    _require_node(node, "node")
    return serialize_nodes([node])


def set_inner_markup(element: Element, html: str, parser: Optional[HTMLParser] = None,
                     config: Optional[Config] = None) -> None:
    """
    Replace the children of ``element`` with the nodes parsed from ``html``.

    The fragment is parsed before anything is removed, so a parse failure
    leaves the element untouched. An empty string just clears the children.
    Without ``parser`` the backend is chosen from ``config`` the same way
    ``DomBuilder`` chooses it, so fragments match the document they go into.
    """
    _require_node(element, "element")
    if html is None:
        raise InvalidArgumentError("html")

    if parser is None:
        parser = create_parser(config)

    nodes = parser.parse_fragment(html, "") if html else []

    element.remove_all_children()
    for node in nodes:
        _adopt(node, element.owner_document)
        element.append_child(node)

    logger.debug(f"Replaced children of <{element.tag_name}> with {len(nodes)} parsed nodes")


def _adopt(node: Node, owner_document: Optional[Document]) -> None:
    node.owner_document = owner_document
    for descendant in node.iter_descendants():
        descendant.owner_document = owner_document


# Tag name queries

def _iter_elements_by_tag_name(node: Node, tag_name: str):
    for element in node.iter_descendant_elements():
        if element.has_tag_name(tag_name):
            yield element


def get_elements_by_tag_name(node: Node, tag_name: str) -> List[Element]:
    """Return descendant elements named ``tag_name`` (any case), in document order."""
    _require_node(node, "node")
    _require_name(tag_name, "tag_name")

    return list(_iter_elements_by_tag_name(node, tag_name))


def get_children_by_tag_name(node: Node, tag_name: str) -> List[Element]:
    """Return direct child elements named ``tag_name`` (any case), in order."""
    _require_node(node, "node")
    _require_name(tag_name, "tag_name")

    return [child for child in node.children if child.has_tag_name(tag_name)]
