"""Tests for the single-match helpers."""

import itertools
import typing

import pytest

from readability_dom.dom import Comment, Element, Text
from readability_dom.errors import InvalidArgumentError
from readability_dom.utils.iterables import single_element_or_none, single_or_none


class TestSingleOrNone:
    """Test reducing a sequence to its only item."""

    def test_empty(self) -> None:
        assert single_or_none([]) is None

    def test_single_item(self) -> None:
        assert single_or_none(["x"]) == "x"

    def test_falsy_single_item(self) -> None:
        assert single_or_none([0]) == 0

    def test_two_items(self) -> None:
        assert single_or_none(["x", "y"]) is None

    def test_pulls_at_most_two_items(self) -> None:
        counter = itertools.count()

        assert single_or_none(counter) is None
        assert next(counter) == 2

    def test_one_shot_generator(self) -> None:
        assert single_or_none(n for n in range(5) if n == 3) == 3

    def test_none_raises(self) -> None:
        with pytest.raises(InvalidArgumentError):
            single_or_none(None)


class TestSingleElementOrNone:
    """Test the element-only variant."""

    def test_ignores_text_and_comments(self) -> None:
        element = Element("p")

        assert single_element_or_none([Text(" "), element, Comment("c")]) is element

    def test_several_elements(self) -> None:
        assert single_element_or_none([Element("p"), Text("x"), Element("p")]) is None

    def test_no_elements(self) -> None:
        assert single_element_or_none([Text("x")]) is None

    def test_none_raises(self) -> None:
        with pytest.raises(InvalidArgumentError):
            single_element_or_none(None)

    def test_annotations_resolve(self) -> None:
        hints = typing.get_type_hints(single_element_or_none)

        assert hints["return"] == typing.Optional[Element]
