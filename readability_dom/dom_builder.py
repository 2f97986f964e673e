"""
Construction of DOM trees from HTML markup.
"""

import logging
from typing import Optional

from .dom import Document
from .errors import InvalidArgumentError, MarkupParseError
from .parser import HTMLParser, create_parser, is_unterminated_content_error
from .utils.config import Config
from .utils.html_utils import remove_script_tags, truncate_after_html_end
from .utils.logging import PerformanceLogger, log_exception

logger = logging.getLogger(__name__)


class DomBuilder:
    """
    Builds a ``Document`` from HTML markup.

    The builder keeps no state between calls; one instance can build any
    number of documents.
    """

    def __init__(self, config: Optional[Config] = None, parser: Optional[HTMLParser] = None):
        """
        Initialize the builder.

        Args:
            config: Configuration; defaults are used when omitted
            parser: Parser backend; chosen from ``config`` when omitted
        """
        self.config = config if config is not None else Config()
        self.parser = parser if parser is not None else create_parser(self.config)
        self._perf = PerformanceLogger(logger, "DomBuilder")

        logger.debug(f"DomBuilder initialized with {self.parser.name} parser")

    def build_document(self, html_content: str) -> Document:
        """
        Construct a DOM from HTML markup.

        Everything after the last ``</html>`` end tag is discarded before
        parsing. If the parser fails because the markup ended inside some
        construct (usually an unclosed ``<script>``), script blocks are
        stripped and the parse is retried once.

        Args:
            html_content: HTML markup from which the DOM is to be constructed

        Returns:
            Document: The DOM of the markup; empty for blank input

        Raises:
            InvalidArgumentError: If ``html_content`` is None
            MarkupParseError: If parsing fails and cannot be recovered
        """
        if html_content is None:
            raise InvalidArgumentError("html_content")

        if not html_content.strip():
            logger.debug("Blank HTML content, returning an empty document")
            return Document()

        if self.config.get("builder.truncate_after_html_end", True):
            truncated = truncate_after_html_end(html_content)
            if len(truncated) != len(html_content):
                logger.debug(f"Dropped {len(html_content) - len(truncated)} characters after </html>")
            html_content = truncated

        try:
            return self._load_document(html_content)
        except MarkupParseError as e:
            if not self.config.get("builder.retry_without_scripts", True) or not is_unterminated_content_error(e):
                raise

            logger.warning(f"Parsing failed ({e}), retrying with <script> blocks removed")

        try:
            return self._load_document(remove_script_tags(html_content))
        except MarkupParseError as e:
            log_exception(logger, e, "Parsing failed again after removing <script> blocks")
            raise

    def _load_document(self, html_content: str) -> Document:
        self._perf.start("parse")
        try:
            return self.parser.parse_document(html_content)
        finally:
            self._perf.end("parse")


def build_document(html_content: str) -> Document:
    """Build a document with a default-configured ``DomBuilder``."""
    return DomBuilder().build_document(html_content)
