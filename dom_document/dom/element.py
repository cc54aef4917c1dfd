"""
Element implementation for the DOM.
This module wraps a single lxml element with document order comparison and
per element conveniences (inline styles, attributes, scoped queries).
"""

import logging
from typing import Dict, List, Optional, Union

from lxml import etree

from dom_document.dom.node import is_element, local_name, text_content
from dom_document.dom.selector_engine import selector_engine
from dom_document.parser.css_parser import CSSParser
from dom_document.parser.html_parser import HTMLParser

logger = logging.getLogger(__name__)

_css_parser = CSSParser()
_html_parser = HTMLParser()


def _unwrap(node: Union['DOMElement', etree._Element]) -> etree._Element:
    if isinstance(node, DOMElement):
        return node.node
    return node


class DOMElement:
    """
    A single element of a parsed document.

    Two wrappers are equal when they wrap the same node, so wrappers can be
    used in sets and as dictionary keys.
    """

    def __init__(self, node: Union['DOMElement', etree._Element]):
        """
        Initialize a new DOMElement.

        Args:
            node: The lxml element (or another wrapper) to wrap

        Raises:
            TypeError: If node is not an lxml node
        """
        node = _unwrap(node)
        if not isinstance(node, etree._Element):
            raise TypeError(f"DOMElement wraps lxml nodes, not {type(node).__name__}")
        self.node = node

    def __eq__(self, other) -> bool:
        if isinstance(other, DOMElement):
            return self.node is other.node
        if isinstance(other, etree._Element):
            return self.node is other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.node)

    def __repr__(self) -> str:
        return f"<DOMElement {self.tag_name}>"

    def __str__(self) -> str:
        return self.outer_html

    # Document order

    @staticmethod
    def sort_by_dom_position(a: 'DOMElement', b: 'DOMElement') -> int:
        """
        Comparison function ordering wrappers by document position.

        Args:
            a: First element
            b: Second element

        Returns:
            int: -1 if a comes first, 1 if b comes first, 0 if they are the same node
        """
        if a == b:
            return 0
        return -1 if a.is_before(b) else 1

    def is_before(self, other: Union['DOMElement', etree._Element]) -> bool:
        """
        Check if this element comes before another one in document order.

        An ancestor comes before its descendants.

        Args:
            other: The element to compare with

        Returns:
            bool: True if this element comes first
        """
        this = self.node
        other = _unwrap(other)

        if this is other:
            return False

        # Lineages from the root down to each node
        this_line = _lineage(this)
        other_line = _lineage(other)

        index = 0
        while (index < len(this_line) and index < len(other_line)
               and this_line[index] is other_line[index]):
            index += 1

        if index == len(this_line):
            # this is an ancestor of other
            return True
        if index == len(other_line):
            return False

        return _breadth(this_line[index]) < _breadth(other_line[index])

    def get_breadth(self) -> int:
        """Number of preceding siblings."""
        return _breadth(self.node)

    def get_depth(self) -> int:
        """Number of ancestors."""
        return _depth(self.node)

    def contains(self, other: Union['DOMElement', etree._Element]) -> bool:
        """
        Check if another element is a descendant of this one.

        Args:
            other: The possible descendant

        Returns:
            bool: True if this element is a strict ancestor of other
        """
        parent = _unwrap(other).getparent()
        while parent is not None:
            if parent is self.node:
                return True
            parent = parent.getparent()
        return False

    # Properties

    @property
    def tag_name(self) -> str:
        """Lower cased local name of the element."""
        return local_name(self.node)

    @property
    def id(self) -> Optional[str]:
        """Get or set the ID of the element."""
        return self.get_attribute('id')

    @id.setter
    def id(self, value: str) -> None:
        self.set_attribute('id', value)

    @property
    def parent(self) -> Optional['DOMElement']:
        """The parent element, None for the root."""
        parent = self.node.getparent()
        return DOMElement(parent) if parent is not None else None

    @property
    def owner_tree(self) -> etree._ElementTree:
        """The tree this element belongs to."""
        return self.node.getroottree()

    @property
    def outer_html(self) -> str:
        """HTML5 markup of the element itself."""
        return _html_parser.serialize(self.node)

    @property
    def inner_html(self) -> str:
        """HTML5 markup of the element's content."""
        return _html_parser.serialize_inner(self.node)

    @property
    def text_content(self) -> str:
        """All text inside the element."""
        return text_content(self.node)

    @property
    def attributes(self) -> Dict[str, str]:
        """Copy of the element's attributes."""
        return dict(self.node.attrib) if is_element(self.node) else {}

    # Queries

    def query_selector_all(self, selector: str, sort: bool = True) -> 'DOMObject':
        """
        Find descendants matching a CSS selector.

        Args:
            selector: The CSS selector
            sort: Sort the results in document order

        Returns:
            DOMObject: The matching elements
        """
        from dom_document.dom.dom_object import DOMObject

        results = DOMObject(selector_engine.select(selector, self.node))
        if sort:
            results.sort()
        return results

    def query_selector(self, selector: str) -> Optional['DOMElement']:
        """
        Find the first descendant matching a CSS selector.

        Args:
            selector: The CSS selector

        Returns:
            The first match in document order, or None
        """
        results = selector_engine.select(selector, self.node)
        return DOMElement(results[0]) if results else None

    def matches(self, selector: str) -> bool:
        """Check if this element matches a CSS selector."""
        return selector_engine.matches(self.node, selector)

    # Inline styles

    def get_inline_styles(self) -> Dict[str, str]:
        """
        Get the declarations of the style attribute.

        Returns:
            Dict[str, str]: Property names and values in declaration order
        """
        return _css_parser.parse_inline_styles(self.get_attribute('style'))

    def get_inline_style(self, name: str) -> Optional[str]:
        """
        Get one declaration of the style attribute.

        Args:
            name: CSS property name

        Returns:
            The value, or None if the property is not set inline
        """
        return self.get_inline_styles().get(name)

    def set_inline_style(self, name: str, value: str) -> None:
        """
        Set one declaration of the style attribute.

        Args:
            name: CSS property name
            value: CSS value
        """
        styles = self.get_inline_styles()
        styles[name] = value
        self._write_inline_styles(styles)

    def remove_inline_style(self, name: str) -> None:
        """
        Remove one declaration of the style attribute.

        The attribute itself is removed once no declarations are left.

        Args:
            name: CSS property name
        """
        styles = self.get_inline_styles()
        if name not in styles:
            return
        del styles[name]
        self._write_inline_styles(styles)

    def _write_inline_styles(self, styles: Dict[str, str]) -> None:
        if styles:
            self.set_attribute('style', _css_parser.serialize_inline_styles(styles))
        else:
            self.remove_attribute('style')

    # Attributes

    def get_attribute(self, name: str) -> Optional[str]:
        """
        Get the value of an attribute.

        Args:
            name: The attribute name

        Returns:
            The attribute value, or None if not present
        """
        if not is_element(self.node):
            return None
        return self.node.get(name)

    def set_attribute(self, name: str, value: str) -> None:
        """
        Set the value of an attribute.

        Args:
            name: The attribute name
            value: The attribute value
        """
        self.node.set(name, value)

    def has_attribute(self, name: str) -> bool:
        """
        Check if the element has an attribute.

        Args:
            name: The attribute name

        Returns:
            True if the attribute exists, False otherwise
        """
        return is_element(self.node) and name in self.node.attrib

    def remove_attribute(self, name: str) -> None:
        """
        Remove an attribute.

        Args:
            name: The attribute name
        """
        if self.has_attribute(name):
            del self.node.attrib[name]


def _breadth(node: etree._Element) -> int:
    count = 0
    sibling = node.getprevious()
    while sibling is not None:
        count += 1
        sibling = sibling.getprevious()
    return count


def _depth(node: etree._Element) -> int:
    count = 0
    parent = node.getparent()
    while parent is not None:
        count += 1
        parent = parent.getparent()
    return count


def _lineage(node: etree._Element) -> List[etree._Element]:
    lineage = [node]
    lineage.extend(node.iterancestors())
    lineage.reverse()
    return lineage
