"""Tests for the query and attribute helpers."""

import pytest

from readability_dom.dom import Document, Element, Text
from readability_dom.dom_api import (
    get_attribute,
    get_attributes_string,
    get_body,
    get_children_by_tag_name,
    get_class,
    get_element_by_id,
    get_elements_by_tag_name,
    get_id,
    get_inner_markup,
    get_outer_markup,
    get_style,
    get_title,
    set_attribute,
    set_class,
    set_id,
    set_inner_markup,
    set_style,
)
from readability_dom.dom_builder import build_document
from readability_dom.errors import AmbiguousLookupError, InvalidArgumentError, MarkupParseError
from readability_dom.parser import Html5libParser
from readability_dom.utils.config import Config


def body_of(html):
    return get_body(build_document(html))


class TestAttributes:
    """Test the attribute accessors."""

    def test_set_id_then_remove(self) -> None:
        element = Element("div")

        set_id(element, "x")
        assert get_attribute(element, "id", "") == "x"

        set_attribute(element, "id", None)
        assert get_attribute(element, "id", "") == ""
        assert not element.has_attribute("id")

    def test_default_only_for_absent_attribute(self) -> None:
        element = Element("div")
        element.set_attribute("title", "")

        assert get_attribute(element, "title", "fallback") == ""
        assert get_attribute(element, "lang", "fallback") == "fallback"
        assert get_attribute(element, "lang", None) is None

    def test_removing_absent_attribute_is_noop(self) -> None:
        element = Element("div")

        set_attribute(element, "id", None)

        assert not element.has_attributes()

    def test_class_and_style(self) -> None:
        element = Element("div")
        set_class(element, "lead")
        set_style(element, "color: red")

        assert get_class(element) == "lead"
        assert get_style(element) == "color: red"
        assert get_id(element) == ""

        set_class(element, None)
        assert get_class(element) == ""

    def test_overwrite_keeps_attribute_order(self) -> None:
        element = Element("div")
        set_id(element, "a")
        set_class(element, "b")
        set_id(element, "c")

        assert element.attribute_items() == [("id", "c"), ("class", "b")]

    def test_attributes_string_skips_empty_values(self) -> None:
        element = Element("div")
        element.set_attribute("class", "a")
        element.set_attribute("style", "")
        element.set_attribute("id", "b")

        assert get_attributes_string(element, ",") == "a,b"
        assert get_attributes_string(Element("div"), ",") == ""

    def test_invalid_arguments(self) -> None:
        element = Element("div")

        with pytest.raises(InvalidArgumentError):
            get_attribute(None, "id", "")
        with pytest.raises(InvalidArgumentError):
            get_attribute(element, "", "")
        with pytest.raises(InvalidArgumentError):
            set_attribute(element, None, "x")
        with pytest.raises(InvalidArgumentError):
            get_attributes_string(element, None)


class TestQueries:
    """Test tag name and id lookups."""

    def test_tag_name_match_ignores_case(self) -> None:
        body = body_of('<DIV id="a"><div id="b"></div></DIV>')

        assert [get_id(e) for e in get_elements_by_tag_name(body, "div")] == ["a", "b"]
        assert [get_id(e) for e in get_elements_by_tag_name(body, "DIV")] == ["a", "b"]

    def test_case_is_preserved_for_built_elements(self) -> None:
        div = Element("DIV")
        div.set_attribute("id", "a")
        root = Element("body")
        root.append_child(div)

        assert get_elements_by_tag_name(root, "div") == [div]

    def test_elements_by_tag_name_excludes_node_itself(self) -> None:
        body = body_of("<div><div></div></div>")
        outer = body.first_child

        assert get_elements_by_tag_name(outer, "div") == [outer.first_child]

    def test_children_by_tag_name_is_direct_only(self) -> None:
        body = body_of("<div><p>1</p><section><p>2</p></section><P>3</P></div>")
        div = body.first_child

        assert [p.text_content for p in get_children_by_tag_name(div, "p")] == ["1", "3"]

    def test_element_by_id(self) -> None:
        document = build_document('<div id="main"><p id="A">x</p></div>')

        assert get_element_by_id(document, "main").tag_name == "div"
        assert get_element_by_id(document, "a") is None
        assert get_element_by_id(document, "missing") is None

    def test_element_by_id_ambiguous(self) -> None:
        document = build_document('<p id="dup">1</p><p id="dup">2</p>')

        with pytest.raises(AmbiguousLookupError) as excinfo:
            get_element_by_id(document, "dup")

        assert excinfo.value.id == "dup"
        assert excinfo.value.count == 2

    def test_element_by_id_requires_id(self) -> None:
        with pytest.raises(InvalidArgumentError):
            get_element_by_id(Document(), "")

    def test_title(self) -> None:
        document = build_document("<html><head><title> Hi </title></head></html>")

        assert get_title(document) == "Hi"

    def test_title_without_head(self) -> None:
        document = Document()
        html = document.append_child(document.create_element("html"))
        html.append_child(document.create_element("body"))

        assert get_title(document) == ""
        assert get_title(Document()) == ""

    def test_title_without_title_element(self) -> None:
        assert get_title(build_document("<p>x</p>")) == ""

    def test_body(self) -> None:
        document = build_document("<p>x</p>")

        assert get_body(document).tag_name == "body"
        assert get_body(Document()) is None


class TestMarkup:
    """Test inner and outer markup."""

    def test_inner_markup_uses_full_end_tags(self) -> None:
        body = body_of("<div><span></span><p></p></div>")

        assert get_inner_markup(body) == "<div><span></span><p></p></div>"
        assert get_outer_markup(body.first_child) == "<div><span></span><p></p></div>"

    def test_inner_markup_of_document(self) -> None:
        document = build_document("<p>x</p>")

        assert get_inner_markup(document) == "<html><head></head><body><p>x</p></body></html>"

    @pytest.mark.parametrize("html", [
        "<div><p>unclosed<span></div>",
        "<table><td>cell</table><b>bold",
        "<ul><li>a<li>b</ul><p><br/><img src=x></p>",
        "<div><div><div></div></div></div><textarea></textarea>",
    ])
    def test_no_self_closing_tags(self, html) -> None:
        document = build_document(html)

        markup = get_inner_markup(document.document_element)

        assert "/>" not in markup

    def test_void_elements_have_no_end_tag(self) -> None:
        body = body_of('<p>a<br>b<img src="x.png"></p>')

        assert get_inner_markup(body) == '<p>a<br>b<img src="x.png"></p>'

    def test_round_trip(self) -> None:
        body = body_of('<div class="c"><p>a &amp; b<br><em></em></p>tail<!--note--></div>')
        before = get_inner_markup(body)

        set_inner_markup(body, before)

        assert get_inner_markup(body) == before

    def test_set_inner_markup_replaces_children(self) -> None:
        document = build_document("<div><p>old</p></div>")
        div = get_elements_by_tag_name(document, "div")[0]

        set_inner_markup(div, "<span>new</span> text")

        assert [node.node_name for node in div.child_nodes] == ["span", "#text"]
        assert div.first_child.parent_node is div
        assert all(node.owner_document is document for node in div.iter_descendants())
        assert get_inner_markup(div) == "<span>new</span> text"

    def test_set_inner_markup_empty_clears(self) -> None:
        div = Element("div")
        div.append_child(Text("x"))

        set_inner_markup(div, "")

        assert not div.has_child_nodes()

    def test_set_inner_markup_follows_configured_backend(self) -> None:
        html5lib_div = Element("div")
        soup_div = Element("div")

        set_inner_markup(html5lib_div, "<td>cell</td>")
        set_inner_markup(soup_div, "<td>cell</td>", config=Config(overrides={"parser": {"backend": "html.parser"}}))

        assert [node.node_name for node in html5lib_div.child_nodes] == ["#text"]
        assert [node.node_name for node in soup_div.child_nodes] == ["td"]

    def test_set_inner_markup_failure_leaves_children(self) -> None:
        div = Element("div")
        div.append_child(Text("keep"))

        with pytest.raises(MarkupParseError):
            set_inner_markup(div, "<p>x</span>", parser=Html5libParser(strict=True))

        assert div.text_content == "keep"

    def test_set_inner_markup_invalid_arguments(self) -> None:
        with pytest.raises(InvalidArgumentError):
            set_inner_markup(None, "<p></p>")
        with pytest.raises(InvalidArgumentError):
            set_inner_markup(Element("div"), None)
