"""
Markup serialization.

``XmlMarkupWriter`` is a generic writer: like most XML writers it emits
``<name />`` for an element that received no content when the element is
closed with ``write_end_element``. HTML5 only allows that form for void
elements, so markup produced for HTML consumers goes through
``FullEndTagWriter``, which turns every end-element event into an explicit
``</name>`` end tag.
"""

import io
import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, List, Optional, TextIO
from xml.sax.saxutils import escape

from .dom import Node, NodeType, Element

logger = logging.getLogger(__name__)

# Elements whose text content is emitted verbatim
RAW_TEXT_ELEMENTS = frozenset({
    'script', 'style', 'xmp', 'iframe', 'noembed', 'noframes', 'plaintext'
})

_ATTRIBUTE_ENTITIES = {'"': '&quot;'}


class WriteState(Enum):
    """Where a writer is in the output it produces."""
    START = "start"
    ELEMENT = "element"        # inside a start tag, attributes may follow
    CONTENT = "content"
    CLOSED = "closed"


class MarkupWriter(ABC):
    """
    Capability interface for markup writers.

    Writers are context managers: leaving the ``with`` block flushes and
    closes the writer whether or not an exception is propagating.
    """

    @abstractmethod
    def write_start_document(self) -> None: ...

    @abstractmethod
    def write_end_document(self) -> None: ...

    @abstractmethod
    def write_doctype(self, name: str, public_id: Optional[str] = None,
                      system_id: Optional[str] = None, subset: Optional[str] = None) -> None: ...

    @abstractmethod
    def write_start_element(self, local_name: str, prefix: Optional[str] = None,
                            namespace: Optional[str] = None) -> None: ...

    @abstractmethod
    def write_attribute(self, name: str, value: str) -> None: ...

    @abstractmethod
    def write_end_element(self) -> None:
        """Close the innermost open element, in whatever form the writer prefers."""

    @abstractmethod
    def write_full_end_element(self) -> None:
        """Close the innermost open element with an explicit ``</name>`` end tag."""

    @abstractmethod
    def write_string(self, text: str) -> None: ...

    @abstractmethod
    def write_comment(self, text: str) -> None: ...

    @abstractmethod
    def write_cdata(self, text: str) -> None: ...

    @abstractmethod
    def write_processing_instruction(self, name: str, text: str) -> None: ...

    @abstractmethod
    def write_entity_ref(self, name: str) -> None: ...

    @abstractmethod
    def write_char_entity(self, char: str) -> None: ...

    @abstractmethod
    def write_whitespace(self, whitespace: str) -> None: ...

    @abstractmethod
    def write_raw(self, data: str) -> None: ...

    @abstractmethod
    def flush(self) -> None: ...

    @abstractmethod
    def close(self) -> None: ...

    @abstractmethod
    def lookup_prefix(self, namespace: str) -> Optional[str]: ...

    @property
    @abstractmethod
    def write_state(self) -> WriteState: ...

    def __enter__(self) -> 'MarkupWriter':
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        try:
            self.flush()
        finally:
            self.close()


class XmlMarkupWriter(MarkupWriter):
    """
    Generic markup writer over a text stream.

    A start tag stays open until content, an end tag or another start tag
    arrives, so attributes can still be added to it.
    """

    def __init__(self, stream: Optional[TextIO] = None, close_output: bool = False):
        """
        Args:
            stream: Output stream; an in-memory buffer is used when omitted
            close_output: Whether ``close()`` also closes ``stream``
        """
        self._stream = stream if stream is not None else io.StringIO()
        self._close_output = close_output
        self._open_elements: List[str] = []
        self._namespaces: Dict[str, str] = {}
        self._state = WriteState.START

    @property
    def write_state(self) -> WriteState:
        return self._state

    def getvalue(self) -> str:
        """Return the text written so far, when writing to an in-memory buffer."""
        return self._stream.getvalue()

    def _write(self, data: str) -> None:
        if self._state == WriteState.CLOSED:
            raise ValueError("Cannot write to a closed writer")
        self._stream.write(data)

    def _finish_start_tag(self) -> None:
        if self._state == WriteState.CLOSED:
            raise ValueError("Cannot write to a closed writer")
        if self._state == WriteState.ELEMENT:
            self._write(">")
        self._state = WriteState.CONTENT

    def write_start_document(self) -> None:
        if self._state != WriteState.START:
            raise ValueError("write_start_document() must be the first call on a writer")

    def write_end_document(self) -> None:
        while self._open_elements:
            self.write_end_element()

    def write_doctype(self, name: str, public_id: Optional[str] = None,
                      system_id: Optional[str] = None, subset: Optional[str] = None) -> None:
        self._finish_start_tag()
        parts = [f"<!DOCTYPE {name}"]
        if public_id:
            parts.append(f' PUBLIC "{public_id}"')
            if system_id:
                parts.append(f' "{system_id}"')
        elif system_id:
            parts.append(f' SYSTEM "{system_id}"')
        if subset:
            parts.append(f" [{subset}]")
        parts.append(">")
        self._write("".join(parts))

    def write_start_element(self, local_name: str, prefix: Optional[str] = None,
                            namespace: Optional[str] = None) -> None:
        if not local_name:
            raise ValueError("Element name must not be empty")

        self._finish_start_tag()
        name = f"{prefix}:{local_name}" if prefix else local_name
        if prefix and namespace:
            self._namespaces[namespace] = prefix

        self._write(f"<{name}")
        self._open_elements.append(name)
        self._state = WriteState.ELEMENT

    def write_attribute(self, name: str, value: str) -> None:
        if self._state != WriteState.ELEMENT:
            raise ValueError("Attributes can only be written directly after a start tag")
        self._write(f' {name}="{escape(value, _ATTRIBUTE_ENTITIES)}"')

    def write_end_element(self) -> None:
        if not self._open_elements:
            raise ValueError("No open element to end")

        name = self._open_elements.pop()
        if self._state == WriteState.ELEMENT:
            self._write(" />")
        else:
            self._write(f"</{name}>")
        self._state = WriteState.CONTENT

    def write_full_end_element(self) -> None:
        if not self._open_elements:
            raise ValueError("No open element to end")

        self._finish_start_tag()
        self._write(f"</{self._open_elements.pop()}>")

    def write_string(self, text: str) -> None:
        if not text:
            return
        self._finish_start_tag()
        self._write(escape(text))

    def write_comment(self, text: str) -> None:
        if "-->" in text:
            raise ValueError("Comment text cannot contain '-->'")
        self._finish_start_tag()
        self._write(f"<!--{text}-->")

    def write_cdata(self, text: str) -> None:
        self._finish_start_tag()
        # A literal "]]>" has to be split across two sections
        self._write("<![CDATA[" + text.replace("]]>", "]]]]><![CDATA[>") + "]]>")

    def write_processing_instruction(self, name: str, text: str) -> None:
        if "?>" in text:
            raise ValueError("Processing instruction text cannot contain '?>'")
        self._finish_start_tag()
        self._write(f"<?{name} {text}?>" if text else f"<?{name}?>")

    def write_entity_ref(self, name: str) -> None:
        self._finish_start_tag()
        self._write(f"&{name};")

    def write_char_entity(self, char: str) -> None:
        self._finish_start_tag()
        self._write(f"&#x{ord(char):X};")

    def write_whitespace(self, whitespace: str) -> None:
        if whitespace.strip():
            raise ValueError("write_whitespace() only accepts whitespace characters")
        self._finish_start_tag()
        self._write(whitespace)

    def write_raw(self, data: str) -> None:
        self._finish_start_tag()
        self._write(data)

    def flush(self) -> None:
        if self._state != WriteState.CLOSED:
            self._stream.flush()

    def close(self) -> None:
        if self._state == WriteState.CLOSED:
            return
        self._finish_start_tag()
        self._open_elements.clear()
        self._state = WriteState.CLOSED
        if self._close_output:
            self._stream.close()

    def lookup_prefix(self, namespace: str) -> Optional[str]:
        return self._namespaces.get(namespace)


class FullEndTagWriter(MarkupWriter):
    """
    Writer decorator that always emits explicit end tags.

    Both end-element calls are forwarded as ``write_full_end_element``; every
    other call goes to the wrapped writer unchanged.
    """

    def __init__(self, inner: MarkupWriter):
        self._inner = inner

    @property
    def inner(self) -> MarkupWriter:
        return self._inner

    @property
    def write_state(self) -> WriteState:
        return self._inner.write_state

    def write_start_document(self) -> None:
        self._inner.write_start_document()

    def write_end_document(self) -> None:
        self._inner.write_end_document()

    def write_doctype(self, name: str, public_id: Optional[str] = None,
                      system_id: Optional[str] = None, subset: Optional[str] = None) -> None:
        self._inner.write_doctype(name, public_id, system_id, subset)

    def write_start_element(self, local_name: str, prefix: Optional[str] = None,
                            namespace: Optional[str] = None) -> None:
        self._inner.write_start_element(local_name, prefix, namespace)

    def write_attribute(self, name: str, value: str) -> None:
        self._inner.write_attribute(name, value)

    def write_end_element(self) -> None:
        self._inner.write_full_end_element()

    def write_full_end_element(self) -> None:
        self._inner.write_full_end_element()

    def write_string(self, text: str) -> None:
        self._inner.write_string(text)

    def write_comment(self, text: str) -> None:
        self._inner.write_comment(text)

    def write_cdata(self, text: str) -> None:
        self._inner.write_cdata(text)

    def write_processing_instruction(self, name: str, text: str) -> None:
        self._inner.write_processing_instruction(name, text)

    def write_entity_ref(self, name: str) -> None:
        self._inner.write_entity_ref(name)

    def write_char_entity(self, char: str) -> None:
        self._inner.write_char_entity(char)

    def write_whitespace(self, whitespace: str) -> None:
        self._inner.write_whitespace(whitespace)

    def write_raw(self, data: str) -> None:
        self._inner.write_raw(data)

    def flush(self) -> None:
        self._inner.flush()

    def close(self) -> None:
        self._inner.close()

    def lookup_prefix(self, namespace: str) -> Optional[str]:
        return self._inner.lookup_prefix(namespace)


def _void_start_tag(element: Element) -> str:
    attributes = "".join(
        f' {name}="{escape(value, _ATTRIBUTE_ENTITIES)}"'
        for name, value in element.attribute_items()
    )
    return f"<{element.tag_name}{attributes}>"


def write_node(node: Node, writer: MarkupWriter) -> None:
    """
    Emit writer events for ``node`` and its descendants in document order.

    Documents and fragments contribute only their children. Childless void
    elements are written as a bare start tag through ``write_raw``; an end
    tag such as ``</br>`` would read back as a second element.
    """
    stack = [(node, False)]
    while stack:
        current, closing = stack.pop()

        if closing:
            writer.write_end_element()
            continue

        node_type = current.node_type
        if node_type == NodeType.ELEMENT_NODE:
            if current.is_void_element and not current.child_nodes:
                writer.write_raw(_void_start_tag(current))
                continue

            writer.write_start_element(current.tag_name)
            for name, value in current.attribute_items():
                writer.write_attribute(name, value)
            stack.append((current, True))
            stack.extend((child, False) for child in reversed(current.child_nodes))
        elif node_type == NodeType.TEXT_NODE:
            parent = current.parent_node
            if parent is not None and parent.is_element and parent.tag_name.lower() in RAW_TEXT_ELEMENTS:
                writer.write_raw(current.data)
            else:
                writer.write_string(current.data)
        elif node_type == NodeType.COMMENT_NODE:
            writer.write_comment(current.data)
        elif node_type == NodeType.DOCUMENT_TYPE_NODE:
            writer.write_doctype(current.name, current.public_id, current.system_id)
        elif node_type in (NodeType.DOCUMENT_NODE, NodeType.DOCUMENT_FRAGMENT_NODE):
            stack.extend((child, False) for child in reversed(current.child_nodes))
        else:
            logger.debug(f"Skipping unsupported node type {node_type!r} during serialization")


def serialize_nodes(nodes) -> str:
    """
    Serialize a sequence of nodes to HTML markup with explicit end tags.

    The writer is flushed and closed before returning, also when writing fails.
    """
    buffer = io.StringIO()
    with FullEndTagWriter(XmlMarkupWriter(buffer)) as writer:
        for node in nodes:
            write_node(node, writer)
    return buffer.getvalue()
