"""
Helpers for reducing sequences to a single item.
"""

from typing import Iterable, Optional, TypeVar

from ..dom import Element, Node
from ..errors import InvalidArgumentError

T = TypeVar('T')

_MISSING = object()


def single_or_none(iterable: Iterable[T]) -> Optional[T]:
    """
    Return the only item of ``iterable``, or None if it has zero or several.

    Ambiguity is treated the same as emptiness. At most two items are pulled
    from the iterator, so one-shot generators are fine.
    """
    if iterable is None:
        raise InvalidArgumentError("iterable")

    iterator = iter(iterable)
    first = next(iterator, _MISSING)
    if first is _MISSING:
        return None

    if next(iterator, _MISSING) is not _MISSING:
        return None

    return first


def single_element_or_none(nodes: Iterable[Node]) -> Optional[Element]:
    """
    Return the only element among ``nodes``, ignoring text and comments.

    Returns None when there is no element or more than one.
    """
    if nodes is None:
        raise InvalidArgumentError("nodes")

    return single_or_none(node for node in nodes if node.is_element)
