"""Tests for the parser backends."""

import pytest

from readability_dom.dom import NodeType
from readability_dom.errors import MarkupParseError, UnterminatedContentError
from readability_dom.parser import (
    Html5libParser,
    SoupParser,
    create_parser,
    is_end_of_file_error_code,
    is_unterminated_content_error,
)
from readability_dom.parser.html_parser import UNTERMINATED_RAW_TEXT_CODE
from readability_dom.utils.config import Config


def element_names(node):
    return [element.tag_name for element in node.iter_descendant_elements()]


class TestErrorClassification:
    """Test which parse errors count as unterminated content."""

    @pytest.mark.parametrize("code", [
        "eof-in-comment",
        "eof-in-tag-name",
        "expected-named-closing-tag-but-got-eof",
    ])
    def test_end_of_file_codes(self, code) -> None:
        assert is_end_of_file_error_code(code)

    @pytest.mark.parametrize("code", [
        None,
        "",
        "expected-eof-but-got-start-tag",
        "unexpected-end-tag",
    ])
    def test_other_codes(self, code) -> None:
        assert not is_end_of_file_error_code(code)

    def test_is_unterminated_content_error(self) -> None:
        assert is_unterminated_content_error(UnterminatedContentError("cut off"))
        assert is_unterminated_content_error(MarkupParseError("cut off", "eof-in-attribute-value-double-quote"))
        assert not is_unterminated_content_error(MarkupParseError("bad", "unexpected-end-tag"))
        assert not is_unterminated_content_error(ValueError("eof-in-comment"))


class TestHtml5libParser:
    """Test the html5lib backend."""

    def test_parse_document_builds_full_structure(self) -> None:
        document = Html5libParser().parse_document("<p id='a'>Hi</p>")

        assert document.document_element.tag_name == "html"
        assert element_names(document) == ["html", "head", "body", "p"]
        p = document.document_element.children[1].first_child
        assert p.get_attribute("id") == "a"
        assert p.text_content == "Hi"
        assert p.owner_document is document

    def test_doctype_and_comments(self) -> None:
        document = Html5libParser().parse_document("<!DOCTYPE html><!--top--><html><body></body></html>")

        assert document.doctype.name == "html"
        assert document.child_nodes[1].node_type == NodeType.COMMENT_NODE
        assert document.child_nodes[1].data == "top"

    def test_attribute_order_is_kept(self) -> None:
        document = Html5libParser().parse_document('<div data-b="2" id="x" class="c"></div>')
        div = document.document_element.children[1].first_child

        assert div.attribute_items() == [("data-b", "2"), ("id", "x"), ("class", "c")]

    def test_unterminated_script_is_reported(self) -> None:
        html = '<html><head><script>var a = "<b>";</head><body><p>Hi</p></body></html>'

        with pytest.raises(UnterminatedContentError) as excinfo:
            Html5libParser().parse_document(html)

        assert excinfo.value.code == UNTERMINATED_RAW_TEXT_CODE
        assert "<script>" in str(excinfo.value)

    def test_unterminated_title_keeps_recovered_tree(self) -> None:
        document = Html5libParser().parse_document("<html><head><title>Never closed")
        head = document.document_element.first_child

        assert head.first_child.tag_name == "title"
        assert head.first_child.text_content == "Never closed"

    def test_adjacent_text_is_merged_in_documents(self) -> None:
        document = Html5libParser().parse_document("<p><b>x</b> tail</p>")
        p = document.document_element.children[1].first_child

        assert [node.node_name for node in p.child_nodes] == ["b", "#text"]
        assert p.last_child.data == " tail"

    def test_adjacent_text_is_merged_in_fragments(self) -> None:
        nodes = Html5libParser().parse_fragment("<span>new</span> text &amp; more")

        assert [node.node_name for node in nodes] == ["span", "#text"]
        assert nodes[1].data == " text & more"

    def test_other_errors_are_recovered(self) -> None:
        document = Html5libParser().parse_document("<div><p>one<p>two</span></div>")

        assert element_names(document)[-3:] == ["div", "p", "p"]

    def test_strict_mode_raises_markup_error(self) -> None:
        with pytest.raises(MarkupParseError) as excinfo:
            Html5libParser(strict=True).parse_document("<p>x</p>")

        assert not isinstance(excinfo.value, UnterminatedContentError)
        assert excinfo.value.code == "expected-doctype-but-got-start-tag"

    def test_strict_mode_end_of_file(self) -> None:
        html = "<!DOCTYPE html><html><head><title>x</title></head><body><!-- open"

        with pytest.raises(UnterminatedContentError) as excinfo:
            Html5libParser(strict=True).parse_document(html)

        assert excinfo.value.code == "eof-in-comment"

    def test_parse_fragment(self) -> None:
        nodes = Html5libParser().parse_fragment("<p>a</p>text<!--c-->")

        assert [node.node_type for node in nodes] == [
            NodeType.ELEMENT_NODE, NodeType.TEXT_NODE, NodeType.COMMENT_NODE
        ]
        assert all(node.parent_node is None for node in nodes)
        assert nodes[0].text_content == "a"

    def test_parse_fragment_keeps_whitespace(self) -> None:
        nodes = Html5libParser().parse_fragment(" <b>x</b> ")

        assert [node.node_name for node in nodes] == ["#text", "b", "#text"]

    def test_parse_empty_fragment(self) -> None:
        assert Html5libParser().parse_fragment("") == []


class TestSoupParser:
    """Test the BeautifulSoup backend."""

    def test_structure_is_synthesized(self) -> None:
        document = SoupParser().parse_document("<p class='a b'>x</p>")

        assert element_names(document) == ["html", "head", "body", "p"]
        p = document.document_element.children[1].first_child
        assert p.get_attribute("class") == "a b"

    def test_complete_document(self) -> None:
        html = "<!DOCTYPE html><html><head><title>T</title></head><body><p>x</p></body></html>"

        document = SoupParser().parse_document(html)

        assert document.doctype.name == "html"
        assert document.document_element.tag_name == "html"
        assert element_names(document) == ["html", "head", "title", "body", "p"]

    def test_top_level_text_goes_into_body(self) -> None:
        document = SoupParser().parse_document("hello <b>x</b>")
        body = document.document_element.children[1]

        assert body.tag_name == "body"
        assert body.text_content == "hello x"

    def test_parse_fragment(self) -> None:
        nodes = SoupParser().parse_fragment("<b>x</b> tail")

        assert [node.node_name for node in nodes] == ["b", "#text"]
        assert nodes[1].data == " tail"


class TestCreateParser:
    """Test backend selection."""

    def test_default(self) -> None:
        parser = create_parser()

        assert isinstance(parser, Html5libParser)
        assert not parser.strict

    def test_strict_html5lib(self) -> None:
        parser = create_parser(Config(overrides={"parser": {"strict": True}}))

        assert isinstance(parser, Html5libParser)
        assert parser.strict

    def test_soup_backend(self) -> None:
        parser = create_parser(Config(overrides={"parser": {"backend": "html.parser"}}))

        assert isinstance(parser, SoupParser)

    def test_unknown_backend(self) -> None:
        with pytest.raises(ValueError, match="Unknown parser backend"):
            create_parser(Config(overrides={"parser": {"backend": "lxml"}}))
