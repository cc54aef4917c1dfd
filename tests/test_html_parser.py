"""Unit tests for HTMLParser."""

import pytest
from lxml import etree

from dom_document.parser.html_parser import HTMLParser


@pytest.fixture
def html_parser() -> HTMLParser:
    return HTMLParser()


# ── Parsing ───────────────────────────────────────────────────────────────────


class TestParseDocument:
    def test_returns_tree_and_errors(self, html_parser):
        tree, errors = html_parser.parse_document('<!DOCTYPE html><p>Hi</p>')
        assert isinstance(tree, etree._ElementTree)
        assert tree.getroot().tag == 'html'
        assert errors == []

    def test_collects_errors(self, html_parser):
        _, errors = html_parser.parse_document('<!DOCTYPE html><p>Hi</div>')
        assert [code for _, code, _ in errors] == ['unexpected-end-tag']

    def test_strips_nul_characters(self, html_parser):
        tree, _ = html_parser.parse_document('<!DOCTYPE html><p>H\x00i</p>')
        assert tree.getroot().find('body/p').text == 'Hi'


class TestParseFragment:
    def test_leading_text_and_tails(self, html_parser):
        fragment = html_parser.parse_fragment('lead <b>x</b> tail')
        assert fragment[0] == 'lead '
        assert fragment[1].tag == 'b'
        assert fragment[1].tail == ' tail'

    def test_container_context(self, html_parser):
        fragment = html_parser.parse_fragment('<tr><td>1</td></tr>', container='tbody')
        assert [node.tag for node in fragment] == ['tr']

    def test_rows_are_dropped_outside_tables(self, html_parser):
        fragment = html_parser.parse_fragment('<tr><td>1</td></tr>')
        assert all(getattr(node, 'tag', None) != 'tr' for node in fragment)


# ── Serialization ─────────────────────────────────────────────────────────────


class TestSerialize:
    def test_node_without_siblings_or_tail(self, html_parser):
        root = etree.fromstring('<div><b>1</b>tail<i>2</i></div>')
        assert html_parser.serialize(root.find('b')) == '<b>1</b>'

    def test_void_elements(self, html_parser):
        assert html_parser.serialize(etree.fromstring('<p>a<br/>b</p>')) == '<p>a<br>b</p>'

    def test_options_override(self):
        html_parser = HTMLParser({'alphabetical_attributes': True})
        node = etree.fromstring('<a title="t" href="/">x</a>')
        assert html_parser.serialize(node) == '<a href="/" title="t">x</a>'
        assert html_parser.serialize(node, alphabetical_attributes=False) == '<a title="t" href="/">x</a>'

    def test_serialize_inner(self, html_parser):
        node = etree.fromstring('<div class="c">a<b>1</b>c</div>')
        assert html_parser.serialize_inner(node) == 'a<b>1</b>c'

    def test_serialize_inner_keeps_optional_tags(self, html_parser):
        node = etree.fromstring('<ul><li>One</li><li>Two</li></ul>')
        assert html_parser.serialize_inner(node, omit_optional_tags=True) == '<li>One</li><li>Two</li>'

    def test_serialize_inner_of_empty_and_void(self, html_parser):
        assert html_parser.serialize_inner(etree.fromstring('<div/>')) == ''
        assert html_parser.serialize_inner(etree.fromstring('<br/>')) == ''
        assert html_parser.serialize_inner(etree.Comment('x')) == ''


class TestFormatError:
    def test_with_data(self):
        message = HTMLParser.format_error(((1, 12), 'unexpected-end-tag', {'name': 'div'}))
        assert message == 'line 1, column 12: Unexpected end tag (div). Ignored.'

    def test_unknown_code(self):
        assert HTMLParser.format_error(((2, 3), 'made-up-code', {})) == 'line 2, column 3: made-up-code'
