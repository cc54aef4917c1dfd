"""Unit tests for the DOMObject getters and setters: css, text, html, val, classes, attr, prop and data."""

import logging

import pytest

from dom_document import DOMDocument, DOMObject


# ── css / hide / show ─────────────────────────────────────────────────────────


class TestCss:
    def test_get_all(self, document):
        assert document.find('#blog').css() == {'color': 'red', 'font-weight': 'bold'}

    def test_get_one(self, document):
        assert document.find('#blog').css('color') == 'red'
        assert document.find('#blog').css('margin') is None

    def test_get_on_empty_set(self):
        assert DOMObject().css() is None
        assert DOMObject().css('color') is None

    def test_set_one(self, document):
        links = document.find('#blog')
        assert links.css('color', 'blue') is links
        assert links.attr('style') == 'color: blue; font-weight: bold'

    def test_falsy_value_removes(self, document):
        links = document.find('#blog').css('color', None)
        assert links.attr('style') == 'font-weight: bold'
        links.css('font-weight', '')
        assert links.attr('style') is None

    def test_set_many(self, document):
        links = document.find('#blog').css({'margin': '0', 'color': ''})
        assert links.attr('style') == 'font-weight: bold; margin: 0'

    def test_set_on_every_element(self, document):
        document.find('li').css('color', 'green')
        assert [item.get_inline_style('color') for item in document.find('li')] == ['green'] * 3

    def test_non_string_value(self, document):
        with pytest.raises(TypeError):
            document.find('#blog').css('width', 5)

    def test_value_without_name(self, document):
        with pytest.raises(ValueError):
            document.find('#blog').css(None, 'red')

    def test_value_with_mapping(self, document):
        with pytest.raises(ValueError):
            document.find('#blog').css({'color': 'red'}, 'blue')

    def test_invalid_name(self, document):
        with pytest.raises(TypeError):
            document.find('#blog').css(5)

    def test_hide_and_show(self, document):
        middle = document.find('#middle')
        middle.hide()
        assert middle.attr('style') == 'display: none'
        middle.show()
        assert middle.attr('style') is None


# ── text / html ───────────────────────────────────────────────────────────────


class TestText:
    def test_get_concatenates(self, document):
        assert document.find('#list li').text() == 'OneTwoThree'

    def test_get_on_empty_set(self):
        assert DOMObject().text() == ''

    def test_set_replaces_content(self, document):
        target = document.find('#html-method-test')
        assert target.text('New') is target
        assert target.html() == 'New'

    def test_set_scalar(self, document):
        assert document.find('#middle').text(5).text() == '5'

    def test_set_is_escaped(self, document):
        target = document.find('#middle').text('<b>x</b>')
        assert target.html() == '&lt;b&gt;x&lt;/b&gt;'
        assert target.children().length == 0

    def test_set_empty_clears(self, document):
        assert document.find('#html-method-test').text('').html() == ''

    def test_set_non_scalar(self, document):
        with pytest.raises(TypeError):
            document.find('#middle').text(['x'])


class TestHtml:
    def test_get_first_inner_html(self, document):
        assert document.find('#html-method-test').html() == '<span>Inner</span> text'

    def test_get_on_empty_set(self):
        assert DOMObject().html() is None

    def test_set_keeps_text_between_nodes(self, document):
        target = document.find('#html-method-test').html('lead <b>Bold</b> tail <i>x</i>')
        assert target.html() == 'lead <b>Bold</b> tail <i>x</i>'

    def test_set_on_every_element(self, document):
        document.find('li').html('<em>Item</em>')
        assert document.find('li em').length == 3

    def test_set_list_items(self, document):
        document.find('#list').html('<li>A</li><li>B</li>')
        assert document.find('#list').children().text() == 'AB'

    def test_set_table_rows(self):
        document = DOMDocument('<table><tbody id="rows"></tbody></table>')
        document.find('#rows').html('<tr><td>1</td></tr>')
        assert document.find('#rows > tr > td').text() == '1'

    def test_set_empty_clears(self, document):
        assert document.find('#list').html('').children().length == 0

    def test_set_non_string(self, document):
        with pytest.raises(TypeError):
            document.find('#list').html(5)


# ── val ───────────────────────────────────────────────────────────────────────


class TestVal:
    def test_input(self, document):
        assert document.find('#title').val() == 'Hello'
        assert document.find('#count').val() is None

    def test_textarea(self, document):
        assert document.find('#body').val() == 'Text'

    def test_select(self, document):
        assert document.find('#colour').val() == 'green'

    def test_option_without_value_uses_text(self, document):
        assert document.find('#colour option').last().val() == 'Blue'

    def test_other_elements_use_text(self, document):
        assert document.find('#middle').val() == 'Middle'

    def test_empty_set(self):
        assert DOMObject().val() is None

    def test_set_input(self, document):
        document.find('#title').val('Bye')
        assert document.find('#title').attr('value') == 'Bye'

    def test_set_textarea(self, document):
        document.find('#body').val(42)
        assert document.find('#body').val() == '42'

    def test_set_select(self, document):
        colour = document.find('#colour').val('red')
        assert colour.val() == 'red'
        assert document.find('#colour option[selected]').length == 1

    def test_set_select_by_text(self, document):
        assert document.find('#colour').val('Blue').val() == 'Blue'

    def test_set_select_missing_option(self, document, caplog):
        with caplog.at_level(logging.WARNING):
            colour = document.find('#colour').val('purple')
        assert colour.val() is None
        assert 'Option with value "purple" not found in "colour"' in caplog.text

    def test_set_other_element(self, document):
        assert document.find('#middle').val('x').text() == 'x'

    def test_set_non_scalar(self, document):
        with pytest.raises(TypeError):
            document.find('#title').val({'a': 1})


# ── Classes ───────────────────────────────────────────────────────────────────


class TestClasses:
    def test_has_class(self, document):
        assert document.find('li').has_class('last')
        assert not document.find('li').has_class('item-last')
        assert not document.find('#middle').has_class('middle')

    def test_add_class(self, document):
        items = document.find('li').add_class('new item')
        assert items.attr('class') == 'item first new'
        assert document.find('.new').length == 3

    def test_add_class_to_element_without_classes(self, document):
        assert document.find('#middle').add_class('shown').attr('class') == 'shown'

    def test_remove_class(self, document):
        items = document.find('li').remove_class('item first')
        assert items.attr('class') == ''
        assert document.find('.item').length == 0
        assert document.find('.last').length == 1

    def test_remove_class_without_attribute(self, document):
        middle = document.find('#middle').remove_class('item')
        assert middle.attr('class') is None


# ── attr / prop / remove_attr ─────────────────────────────────────────────────


class TestAttr:
    def test_get(self, document):
        assert document.find('#blog').attr('href') == '/blog'
        assert document.find('#blog').attr('title') is None
        assert DOMObject().attr('href') is None

    def test_set(self, document):
        links = document.find('#blog')
        assert links.attr('title', 'Blog') is links
        assert links.attr('title') == 'Blog'

    def test_set_scalar(self, document):
        assert document.find('#blog').attr('data-x', 3).attr('data-x') == '3'

    def test_true_sets_name(self, document):
        assert document.find('#title').attr('disabled', True).attr('disabled') == 'disabled'

    def test_false_and_none_remove(self, document):
        document.find('#blog').attr('href', False)
        assert document.find('#blog').attr('href') is None
        document.find('#title').attr('required', None)
        assert document.find('#title').attr('required') is None

    def test_set_many(self, document):
        links = document.find('#blog').attr({'rel': 'nofollow', 'href': None})
        assert links.attr('rel') == 'nofollow'
        assert links.attr('href') is None

    def test_empty_name(self, document):
        with pytest.raises(ValueError):
            document.find('#blog').attr('')

    def test_value_with_mapping(self, document):
        with pytest.raises(ValueError):
            document.find('#blog').attr({'rel': 'x'}, 'y')

    def test_invalid_name(self, document):
        with pytest.raises(TypeError):
            document.find('#blog').attr(5)

    def test_invalid_value_leaves_element_unchanged(self, document):
        with pytest.raises(TypeError):
            document.find('#blog').attr({'title': 'ok', 'rel': ['x']})
        assert document.find('#blog').attr('title') is None


class TestProp:
    def test_get(self, document):
        assert document.find('#agree').prop('checked') is True
        assert document.find('#choice-a').prop('checked') is False
        assert DOMObject().prop('checked') is None

    def test_set(self, document):
        radio = document.find('#choice-a').prop('checked', True)
        assert radio.attr('checked') == 'checked'
        radio.prop('checked', False)
        assert not radio.prop('checked')


class TestRemoveAttr:
    def test_remove_several(self, document):
        links = document.find('#blog').remove_attr('href style')
        assert links.attr('href') is None
        assert links.attr('style') is None
        assert links.attr('id') == 'blog'


# ── data ──────────────────────────────────────────────────────────────────────


class TestData:
    def test_get_all(self, document):
        assert document.find('li.last').data() == {'id': '3', 'role': 'final'}
        assert document.find('li.first').data() == {}

    def test_get_one(self, document):
        assert document.find('li.last').data('role') == 'final'
        assert document.find('li.last').data('missing') is None
        assert DOMObject().data('role') is None

    def test_set_one(self, document):
        items = document.find('li').data('id', 7)
        assert items.attr('data-id') == '7'
        assert document.find('[data-id="7"]').length == 3

    def test_set_many(self, document):
        items = document.find('li.first').data({'id': 1, 'role': 'start'})
        assert items.data() == {'id': '1', 'role': 'start'}

    def test_value_without_name(self, document):
        with pytest.raises(ValueError):
            document.find('li').data(None, 'x')

    def test_value_with_mapping(self, document):
        with pytest.raises(ValueError):
            document.find('li').data({'id': 1}, 'x')

    def test_invalid_types(self, document):
        with pytest.raises(TypeError):
            document.find('li').data(5)
        with pytest.raises(TypeError):
            document.find('li').data('id', [1])
