"""
readability_dom - HTML to DOM construction, queries and HTML5-conformant
serialization for content-extraction algorithms.
"""

import os

from readability_dom.utils.logging import setup_logging

# Set up basic logging
logger = setup_logging(console_level=os.environ.get("READABILITY_DOM_LOG_LEVEL", "WARNING"))

# Package information
__version__ = "0.1.0"
__description__ = "HTML to DOM construction and HTML5-conformant serialization"

from readability_dom.errors import (  # noqa: E402
    DomError, InvalidArgumentError, AmbiguousLookupError, MarkupParseError, UnterminatedContentError,
)
from readability_dom.dom import Document, Element, Node, NodeType, Text, Comment  # noqa: E402
from readability_dom.dom_builder import DomBuilder, build_document  # noqa: E402
from readability_dom.dom_api import (  # noqa: E402
    get_attribute, set_attribute, get_id, set_id, get_class, set_class, get_style, set_style,
    get_attributes_string, get_inner_markup, get_outer_markup, set_inner_markup,
    get_elements_by_tag_name, get_children_by_tag_name, get_body, get_title, get_element_by_id,
)
from readability_dom.serializer import FullEndTagWriter, XmlMarkupWriter  # noqa: E402
from readability_dom.utils.iterables import single_or_none, single_element_or_none  # noqa: E402

logger.debug(f"readability_dom v{__version__} initialized")

__all__ = [
    'DomError', 'InvalidArgumentError', 'AmbiguousLookupError', 'MarkupParseError',
    'UnterminatedContentError',
    'Document', 'Element', 'Node', 'NodeType', 'Text', 'Comment',
    'DomBuilder', 'build_document',
    'get_attribute', 'set_attribute', 'get_id', 'set_id', 'get_class', 'set_class',
    'get_style', 'set_style', 'get_attributes_string', 'get_inner_markup',
    'get_outer_markup', 'set_inner_markup', 'get_elements_by_tag_name',
    'get_children_by_tag_name', 'get_body', 'get_title', 'get_element_by_id',
    'FullEndTagWriter', 'XmlMarkupWriter',
    'single_or_none', 'single_element_or_none',
]
