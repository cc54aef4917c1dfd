"""Unit tests for DOMElement: document order, properties, queries, styles and attributes."""

from functools import cmp_to_key

import pytest
from lxml import etree

from dom_document import DOMDocument, DOMElement, DOMObject


# ── Helpers ──────────────────────────────────────────────────────────────────


def _one(document, selector: str) -> DOMElement:
    return document.find(selector)[0]


# ── Construction and identity ─────────────────────────────────────────────────


class TestIdentity:
    def test_wraps_lxml_node(self):
        node = etree.Element('div')
        assert DOMElement(node).node is node

    def test_rewrapping_unwraps(self):
        element = DOMElement(etree.Element('div'))
        assert DOMElement(element).node is element.node

    def test_rejects_other_types(self):
        with pytest.raises(TypeError):
            DOMElement('div')

    def test_equality_follows_node(self, document):
        node = _one(document, '#middle').node
        assert DOMElement(node) == DOMElement(node)
        assert DOMElement(node) == node
        assert hash(DOMElement(node)) == hash(DOMElement(node))
        assert DOMElement(node) != _one(document, '.before')


# ── Document order ────────────────────────────────────────────────────────────


class TestDocumentOrder:
    def test_siblings(self, document):
        first, _, last = document.find('li').to_list()
        assert first.is_before(last)
        assert not last.is_before(first)

    def test_ancestor_comes_first(self, document):
        ul = _one(document, '#list')
        li = _one(document, 'li.last')
        assert ul.is_before(li)
        assert not li.is_before(ul)

    def test_different_depths(self, document):
        li = _one(document, 'li.last')
        p = _one(document, '#middle')
        span = _one(document, '#html-method-test span')
        assert li.is_before(p)
        assert p.is_before(span)
        assert not span.is_before(li)

    def test_not_before_itself(self, document):
        p = _one(document, '#middle')
        assert not p.is_before(p)

    def test_sort_by_dom_position(self, document):
        elements = [_one(document, '#middle'), _one(document, 'li.first'), _one(document, '#list')]
        ordered = sorted(elements, key=cmp_to_key(DOMElement.sort_by_dom_position))
        assert [element.id for element in ordered] == ['list', None, 'middle']

    def test_deeply_nested_elements(self):
        root = etree.Element('body')
        leaves = []
        for _ in range(2):
            node = etree.SubElement(root, 'div')
            for _ in range(1500):
                node = etree.SubElement(node, 'div')
            leaves.append(DOMElement(etree.SubElement(node, 'span')))
        assert leaves[0].is_before(leaves[1])
        assert not leaves[1].is_before(leaves[0])
        ordered = sorted(reversed(leaves), key=cmp_to_key(DOMElement.sort_by_dom_position))
        assert ordered == leaves

    def test_find_in_deeply_nested_document(self):
        chain = '<div>' * 1100 + '<span></span>' + '</div>' * 1100
        document = DOMDocument(chain + chain)
        assert document.find('span').length == 2

    def test_breadth_ignores_text(self, document):
        assert _one(document, 'li.first').get_breadth() == 0
        assert _one(document, 'li.last').get_breadth() == 2

    def test_depth(self, document):
        assert DOMElement(document.document_element).get_depth() == 0
        assert _one(document, 'body').get_depth() == 1
        assert _one(document, '#list').get_depth() == 3

    def test_contains(self, document):
        container = _one(document, '#container')
        li = _one(document, 'li.first')
        assert container.contains(li)
        assert not li.contains(container)
        assert not container.contains(container)


# ── Properties ────────────────────────────────────────────────────────────────


class TestProperties:
    def test_tag_name(self, document):
        assert _one(document, '#list').tag_name == 'ul'

    def test_id_read_write(self, document):
        element = _one(document, '.before')
        assert element.id is None
        element.id = 'first-paragraph'
        assert document.find('#first-paragraph')[0] == element

    def test_parent(self, document):
        assert _one(document, 'li.first').parent == _one(document, '#list')
        assert DOMElement(document.document_element).parent is None

    def test_owner_tree(self, document):
        assert _one(document, '#middle').owner_tree.getroot() is document.document_element

    def test_outer_html_excludes_tail(self, document):
        assert _one(document, 'li.first').outer_html == '<li class="item first">One</li>'

    def test_outer_html_keeps_attribute_order(self, document):
        expected = '<li class="item last" data-id="3" data-role="final">Three</li>'
        assert _one(document, 'li.last').outer_html == expected

    def test_inner_html(self, document):
        assert _one(document, '#html-method-test').inner_html == '<span>Inner</span> text'

    def test_inner_html_of_void_element(self, document):
        assert _one(document, '#agree').inner_html == ''

    def test_text_content(self, document):
        assert _one(document, '#html-method-test').text_content == 'Inner text'

    def test_attributes(self, document):
        assert _one(document, 'li.last').attributes == {
            'class': 'item last', 'data-id': '3', 'data-role': 'final'
        }


# ── Queries ───────────────────────────────────────────────────────────────────


class TestQueries:
    def test_query_selector_all_returns_result_set(self, document):
        results = _one(document, '#list').query_selector_all('li')
        assert isinstance(results, DOMObject)
        assert len(results) == 3

    def test_query_selector(self, document):
        assert _one(document, '#list').query_selector('li').text_content == 'One'
        assert _one(document, '#list').query_selector('p') is None

    def test_matches(self, document):
        assert _one(document, 'li.last').matches('#list > .last')


# ── Inline styles ─────────────────────────────────────────────────────────────


class TestInlineStyles:
    def test_get_inline_styles(self, document):
        assert _one(document, '#blog').get_inline_styles() == {'color': 'red', 'font-weight': 'bold'}

    def test_get_inline_style(self, document):
        assert _one(document, '#blog').get_inline_style('color') == 'red'
        assert _one(document, '#blog').get_inline_style('margin') is None

    def test_set_inline_style_keeps_order(self, document):
        link = _one(document, '#blog')
        link.set_inline_style('color', 'blue')
        link.set_inline_style('margin', '0')
        assert link.get_attribute('style') == 'color: blue; font-weight: bold; margin: 0'

    def test_remove_last_style_removes_attribute(self, document):
        link = _one(document, '#blog')
        link.remove_inline_style('color')
        link.remove_inline_style('font-weight')
        assert not link.has_attribute('style')

    def test_remove_missing_style_is_noop(self, document):
        link = _one(document, '#blog')
        link.remove_inline_style('margin')
        assert link.get_attribute('style') == 'color: red; font-weight: bold'


# ── Attributes ────────────────────────────────────────────────────────────────


class TestAttributes:
    def test_get_missing_attribute_is_none(self, document):
        assert _one(document, '#middle').get_attribute('title') is None

    def test_set_and_remove_attribute(self, document):
        element = _one(document, '#middle')
        element.set_attribute('title', 'Hello')
        assert element.has_attribute('title')
        assert element.get_attribute('title') == 'Hello'
        element.remove_attribute('title')
        assert not element.has_attribute('title')

    def test_remove_missing_attribute(self, document):
        element = _one(document, '#middle')
        element.remove_attribute('title')
        assert not element.has_attribute('title')
