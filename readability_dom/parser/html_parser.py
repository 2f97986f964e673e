"""
HTML parser backends.

The tokenizer and tree construction algorithm come from third-party
parsers; this module drives them and converts their output into
``readability_dom.dom`` nodes. Two backends are available:

- ``Html5libParser``: html5lib with its ``dom`` tree builder (the default).
- ``SoupParser``: BeautifulSoup with the stdlib ``html.parser`` backend.
"""

import logging
from typing import List, Optional
from xml.dom import Node as MinidomNode

import html5lib
from html5lib.html5parser import ParseError
from bs4 import BeautifulSoup
from bs4.element import (
    CData, Comment as SoupComment, Declaration, Doctype, NavigableString,
    ProcessingInstruction, Tag,
)

from ..dom import Document, Node, NodeType
from ..errors import MarkupParseError, UnterminatedContentError

logger = logging.getLogger(__name__)

# Reported by html5lib when a raw text element (script, style, title,
# textarea, ...) is still open at the end of the input.
UNTERMINATED_RAW_TEXT_CODE = "expected-named-closing-tag-but-got-eof"

# Raw text elements whose unterminated content is reported as a failure.
# Other elements left open keep the tree html5lib recovered.
UNTERMINATED_FAILURE_ELEMENTS = frozenset({"script"})

# Used when a fragment is parsed without a context element
DEFAULT_FRAGMENT_CONTEXT = "div"


def is_end_of_file_error_code(code: Optional[str]) -> bool:
    """
    Tell whether an html5lib error code means the input ended too early.

    html5lib names these ``eof-in-*`` or ``*-but-got-eof``; codes like
    ``expected-eof-but-got-start-tag`` mean the opposite and don't match.
    """
    if not code:
        return False
    return code.startswith("eof-in-") or code.endswith("-but-got-eof")


def is_unterminated_content_error(error: BaseException) -> bool:
    """
    Tell whether a parse failure was caused by unterminated content.

    This is the single place deciding whether a failed parse is worth
    retrying with script blocks stripped.
    """
    if isinstance(error, UnterminatedContentError):
        return True
    if isinstance(error, MarkupParseError):
        return is_end_of_file_error_code(error.code)
    return False


class HTMLParser:
    """Interface of an HTML parser backend."""

    name = "base"

    def parse_document(self, text: str) -> Document:
        """
        Parse a whole HTML document.

        Args:
            text: Markup to parse

        Returns:
            Document: The parsed document

        Raises:
            MarkupParseError: If the backend cannot produce a tree
        """
        raise NotImplementedError

    def parse_fragment(self, text: str, context_tag_name: str = "") -> List[Node]:
        """
        Parse a markup fragment.

        Args:
            text: Markup to parse
            context_tag_name: Element the fragment is parsed as the content of;
                empty means a generic flow container

        Returns:
            The top-level nodes of the fragment, in parse order. They are
            owned by a throwaway document and have no parent.
        """
        raise NotImplementedError

    @staticmethod
    def _append_converted(target: Node, converted: Node) -> Node:
        """
        Append a converted node, merging text into a preceding text node.

        Tree builders may emit one text node per character token; the DOM
        never holds two adjacent text siblings.

        Returns:
            The node that now holds ``converted``'s content
        """
        last = target.last_child
        if (converted.node_type == NodeType.TEXT_NODE
                and last is not None and last.node_type == NodeType.TEXT_NODE):
            last.append_data(converted.data)
            return last

        return target.append_child(converted)


class Html5libParser(HTMLParser):
    """HTML parser using html5lib for full HTML5 tree construction."""

    name = "html5lib"

    def __init__(self, strict: bool = False):
        """
        Initialize the parser.

        Args:
            strict: Raise on the first parse error instead of recovering
        """
        self.strict = strict
        logger.debug(f"html5lib parser initialized (strict={strict})")

    def _create_parser(self) -> html5lib.HTMLParser:
        return html5lib.HTMLParser(
            tree=html5lib.treebuilders.getTreeBuilder("dom"),
            strict=self.strict,
            namespaceHTMLElements=False,
        )

    def parse_document(self, text: str) -> Document:
        parser = self._create_parser()
        try:
            parsed = parser.parse(text)
        except ParseError as e:
            raise self._translate_error(parser, e) from e

        self._check_unterminated_content(parser)

        document = Document()
        self._convert_children(parsed, document, document)
        return document

    def parse_fragment(self, text: str, context_tag_name: str = "") -> List[Node]:
        parser = self._create_parser()
        try:
            parsed = parser.parseFragment(text, container=context_tag_name or DEFAULT_FRAGMENT_CONTEXT)
        except ParseError as e:
            raise self._translate_error(parser, e) from e

        owner = Document()
        holder = Node(NodeType.DOCUMENT_FRAGMENT_NODE, owner)
        self._convert_children(parsed, holder, owner)
        return self._detach_all(holder)

    @staticmethod
    def _translate_error(parser: html5lib.HTMLParser, error: ParseError) -> MarkupParseError:
        # parseError() records the code before raising in strict mode
        code = parser.errors[-1][1] if parser.errors else None
        if is_end_of_file_error_code(code):
            return UnterminatedContentError(str(error), code)
        return MarkupParseError(str(error), code)

    @staticmethod
    def _check_unterminated_content(parser: html5lib.HTMLParser) -> None:
        for position, code, datavars in parser.errors:
            if code != UNTERMINATED_RAW_TEXT_CODE:
                continue

            name = datavars.get('name', '?')
            where = f"line {position[0]}, column {position[1]}"
            if name.lower() not in UNTERMINATED_FAILURE_ELEMENTS:
                logger.debug(f"Keeping recovered tree for <{name}> left open at end of file ({where})")
                continue

            raise UnterminatedContentError(f"Unexpected end of file inside <{name}> ({where})", code)

    @staticmethod
    def _detach_all(holder: Node) -> List[Node]:
        nodes = list(holder.child_nodes)
        holder.remove_all_children()
        return nodes

    def _convert_children(self, source, parent: Node, document: Document) -> None:
        # Explicit stack instead of recursion, real pages nest deeply
        stack = [(child, parent) for child in reversed(source.childNodes)]
        while stack:
            node, target = stack.pop()
            converted = self._convert_node(node, document)
            if converted is None:
                continue

            self._append_converted(target, converted)
            if converted.is_element:
                stack.extend((child, converted) for child in reversed(node.childNodes))

    @staticmethod
    def _convert_node(node, document: Document) -> Optional[Node]:
        node_type = node.nodeType

        if node_type == MinidomNode.ELEMENT_NODE:
            element = document.create_element(node.tagName, node.namespaceURI)
            for name, value in node.attributes.items():
                element.set_attribute(name, value)
            return element

        if node_type in (MinidomNode.TEXT_NODE, MinidomNode.CDATA_SECTION_NODE):
            return document.create_text_node(node.data)

        if node_type == MinidomNode.COMMENT_NODE:
            return document.create_comment(node.data)

        if node_type == MinidomNode.DOCUMENT_TYPE_NODE:
            return document.create_doctype(node.name, node.publicId, node.systemId)

        logger.debug(f"Skipping unsupported html5lib node type {node_type}")
        return None


class SoupParser(HTMLParser):
    """HTML parser using BeautifulSoup with the stdlib html.parser backend."""

    name = "html.parser"

    def __init__(self, features: str = "html.parser"):
        self.features = features
        logger.debug(f"BeautifulSoup parser initialized (features={features})")

    def _make_soup(self, text: str) -> BeautifulSoup:
        try:
            return BeautifulSoup(text, self.features)
        except Exception as e:
            raise MarkupParseError(f"{self.features} could not parse markup: {e}") from e

    def parse_document(self, text: str) -> Document:
        soup = self._make_soup(text)
        document = Document()
        holder = Node(NodeType.DOCUMENT_FRAGMENT_NODE, document)
        self._convert_children(soup, holder, document)

        # html.parser keeps top-level nodes as found, so a document without
        # a single <html> root gets one synthesized around its content
        elements = holder.children
        strays = [
            node for node in holder.child_nodes
            if node.node_type == NodeType.TEXT_NODE and node.data.strip()
        ]
        root = elements[0] if len(elements) == 1 and elements[0].has_tag_name("html") and not strays else None

        if root is None and (elements or strays):
            root = document.create_element("html")
            body = document.create_element("body")
            root.append_child(document.create_element("head"))
            root.append_child(body)
            content_started = False
            for node in list(holder.child_nodes):
                if node.node_type == NodeType.DOCUMENT_TYPE_NODE:
                    continue
                if node.is_element or node.node_type == NodeType.TEXT_NODE:
                    content_started = True
                if content_started:
                    body.append_child(node)
            holder.append_child(root)

        for node in self._detach_all(holder):
            # Whitespace between top-level nodes has no place in a document
            if node.node_type == NodeType.TEXT_NODE:
                continue
            document.append_child(node)

        return document

    def parse_fragment(self, text: str, context_tag_name: str = "") -> List[Node]:
        soup = self._make_soup(text)
        owner = Document()
        holder = Node(NodeType.DOCUMENT_FRAGMENT_NODE, owner)
        self._convert_children(soup, holder, owner)
        return self._detach_all(holder)

    @staticmethod
    def _detach_all(holder: Node) -> List[Node]:
        nodes = list(holder.child_nodes)
        holder.remove_all_children()
        return nodes

    def _convert_children(self, source: Tag, parent: Node, document: Document) -> None:
        stack = [(child, parent) for child in reversed(source.contents)]
        while stack:
            node, target = stack.pop()
            converted = self._convert_node(node, document)
            if converted is None:
                continue

            self._append_converted(target, converted)
            if converted.is_element:
                stack.extend((child, converted) for child in reversed(node.contents))

    @staticmethod
    def _convert_node(node, document: Document) -> Optional[Node]:
        if isinstance(node, Tag):
            element = document.create_element(node.name)
            for name, value in node.attrs.items():
                # Multi-valued attributes such as class come back as lists
                if isinstance(value, list):
                    value = " ".join(value)
                element.set_attribute(name, value if value is not None else "")
            return element

        if isinstance(node, SoupComment):
            return document.create_comment(str(node))

        if isinstance(node, Doctype):
            parts = str(node).split()
            return document.create_doctype(parts[0] if parts else "html")

        if isinstance(node, CData):
            return document.create_text_node(str(node))

        if isinstance(node, (Declaration, ProcessingInstruction)):
            logger.debug(f"Skipping {type(node).__name__} node")
            return None

        if isinstance(node, NavigableString):
            return document.create_text_node(str(node))

        return None


def create_parser(config=None) -> HTMLParser:
    """
    Create the parser backend selected in the configuration.

    Args:
        config: Optional ``Config``; ``parser.backend`` picks the backend and
            ``parser.strict`` applies to html5lib

    Returns:
        HTMLParser: The parser backend
    """
    backend = config.get("parser.backend", "html5lib") if config is not None else "html5lib"
    strict = bool(config.get("parser.strict", False)) if config is not None else False

    if backend == Html5libParser.name:
        return Html5libParser(strict=strict)
    if backend == SoupParser.name:
        return SoupParser()

    raise ValueError(f"Unknown parser backend: {backend!r}")
