"""
Exceptions raised by the DOM layer.
"""

from typing import Optional


class DomError(Exception):
    """Base class for all readability_dom errors."""


class InvalidArgumentError(DomError, ValueError):
    """A required argument was missing or empty."""

    def __init__(self, argument: str, message: Optional[str] = None):
        self.argument = argument
        super().__init__(message or f"Argument '{argument}' must not be None or empty")


class AmbiguousLookupError(DomError, LookupError):
    """A lookup that requires at most one match found several."""

    def __init__(self, id_value: str, count: int):
        self.id = id_value
        self.count = count
        super().__init__(f"Found {count} elements with id '{id_value}', expected at most one")


class MarkupParseError(DomError):
    """The HTML parser could not turn the markup into a tree."""

    def __init__(self, message: str, code: Optional[str] = None):
        self.code = code
        super().__init__(message)


class UnterminatedContentError(MarkupParseError):
    """
    The markup ended while the parser was still inside a construct.

    Typically an embedded ``<script>`` block that is never closed and
    swallows the remainder of the page.
    """
