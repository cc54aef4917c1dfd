"""
Result set implementation for the DOM.
This module implements DOMObject, an ordered, de-duplicated and chainable
collection of elements with jQuery style traversal and mutation.
"""

import logging
from functools import cmp_to_key
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Union

from lxml import etree

from dom_document.dom.element import DOMElement
from dom_document.dom.node import (
    append_fragment, append_node, append_text, clear_children, clone_node, detach,
    element_children, insert_all_after, insert_before, insert_text_after, insert_text_before,
    is_element, local_name, prepend_nodes, prepend_text, replace_node, text_content,
)
from dom_document.dom.selector_engine import selector_engine
from dom_document.parser.html_parser import HTMLParser
from dom_document.utils.config import Config, get_config

logger = logging.getLogger(__name__)


class _Undefined:
    """Marker for an argument that was not supplied, as opposed to None."""

    def __repr__(self) -> str:
        return 'UNDEFINED'

    def __bool__(self) -> bool:
        return False


UNDEFINED = _Undefined()

# Elements whose content is parsed in a context other than a <div>
FRAGMENT_CONTAINERS = {
    'table', 'thead', 'tbody', 'tfoot', 'tr', 'td', 'th', 'caption', 'colgroup',
    'select', 'textarea', 'title', 'style', 'script',
}

SCALAR_TYPES = (str, int, float, bool)

Subject = Union[DOMElement, etree._Element, 'DOMObject', List[Union[DOMElement, etree._Element]]]

_html_parser = HTMLParser()


def _nodes_of(subject: Subject) -> List[etree._Element]:
    """
    Get the lxml nodes of an insertion argument.

    Raises:
        TypeError: If subject is not an element, a set or a list of elements
    """
    if isinstance(subject, DOMElement):
        return [subject.node]
    if isinstance(subject, etree._Element):
        return [subject]
    if isinstance(subject, DOMObject):
        return [element.node for element in subject]
    if isinstance(subject, (list, tuple)):
        nodes = []
        for item in subject:
            if isinstance(item, DOMElement):
                nodes.append(item.node)
            elif isinstance(item, etree._Element):
                nodes.append(item)
            else:
                raise TypeError(f"Non-element supplied in list: {type(item).__name__}")
        return nodes
    raise TypeError("Argument must be a DOMElement, DOMObject, lxml element, "
                    "list of elements or a string")


def _check_scalar(value: Any, message: str) -> None:
    if not isinstance(value, SCALAR_TYPES):
        raise TypeError(message)


class DOMObject:
    """
    An ordered set of elements supporting chained operations.

    Methods of DOMElement that DOMObject does not define itself can be called
    on a set and are run on every element:

        results.set_attribute('rel', 'nofollow')   # returns the set
        results.get_attribute('href')              # first element's value
        results.query_selector_all('a')            # merged result set
    """

    def __init__(self, subject: Optional[Union[Subject, Iterable]] = None,
                 config: Optional[Config] = None):
        """
        Initialize a result set.

        Args:
            subject: Nothing, a DOMElement, an lxml element, a DOMObject, or an
                iterable of elements. Duplicates are dropped, keeping the first.
            config: Configuration of the owning document. Taken from subject
                when it is a DOMObject, the shared one is used otherwise

        Raises:
            TypeError: If subject or one of its items is not an element
        """
        self._elements: List[DOMElement] = []
        self._config = config

        if subject is None:
            return

        if isinstance(subject, (DOMElement, etree._Element)):
            items: Iterable = [subject]
        elif isinstance(subject, DOMObject):
            items = subject._elements
            if config is None:
                self._config = subject._config
        elif isinstance(subject, (str, bytes, Mapping)) or not isinstance(subject, Iterable):
            raise TypeError("Argument must be a DOMElement, an lxml element, a DOMObject, "
                            f"an iterable of elements or omitted, not {type(subject).__name__}")
        else:
            items = subject

        seen = set()
        for item in items:
            if not isinstance(item, (DOMElement, etree._Element)):
                raise TypeError(f"All items must be elements, {type(item).__name__} given")
            element = item if isinstance(item, DOMElement) else DOMElement(item)
            if element in seen:
                continue
            seen.add(element)
            self._elements.append(element)

    # Container protocol

    def __len__(self) -> int:
        return len(self._elements)

    @property
    def length(self) -> int:
        """Number of elements in the set."""
        return len(self._elements)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return self._spawn(self._elements[index])
        try:
            return self._elements[index]
        except IndexError:
            return None

    def __setitem__(self, index: int, value: Union[DOMElement, etree._Element]) -> None:
        if not isinstance(value, (DOMElement, etree._Element)):
            raise TypeError("Only elements can be stored in a DOMObject")
        index = range(len(self._elements))[index]
        element = DOMElement(value)
        if element in self._elements and self._elements.index(element) != index:
            raise ValueError("Element is already in the set")
        self._elements[index] = element

    def __delitem__(self, index: int) -> None:
        del self._elements[index]

    def __iter__(self) -> Iterator[DOMElement]:
        return iter(list(self._elements))

    def __contains__(self, item) -> bool:
        if isinstance(item, (DOMElement, etree._Element)):
            return DOMElement(item) in self._elements
        return False

    def __str__(self) -> str:
        return self.outer_html

    def __repr__(self) -> str:
        return f"<DOMObject length={len(self._elements)}>"

    @property
    def outer_html(self) -> str:
        """Markup of every element in the set, concatenated."""
        return "".join(element.outer_html for element in self._elements)

    def to_list(self) -> List[DOMElement]:
        """Return the elements as a new list."""
        return list(self._elements)

    def reverse(self) -> 'DOMObject':
        """Reverse the set in place."""
        self._elements.reverse()
        return self

    def sort(self) -> 'DOMObject':
        """Sort the set in place by document order."""
        self._elements.sort(key=cmp_to_key(DOMElement.sort_by_dom_position))
        return self

    def _spawn(self, items: Iterable) -> 'DOMObject':
        return DOMObject(items, config=self._config)

    def _gather(self, nodes: Iterable) -> 'DOMObject':
        results = self._spawn(nodes)
        config = self._config if self._config is not None else get_config()
        if len(results) > 1 and config.get('query.sort', True):
            results.sort()
        return results

    def _empty_result(self, method: Callable):
        # Setters are annotated to return None and chain, queries give an empty set
        returns = getattr(method, '__annotations__', {}).get('return', UNDEFINED)
        if returns is None:
            return self
        if returns == 'DOMObject':
            return self._spawn([])
        if returns is bool:
            return False
        return None

    # Dispatch to DOMElement

    def __getattr__(self, name: str):
        if name.startswith('_'):
            raise AttributeError(name)

        attribute = getattr(DOMElement, name, None)

        if isinstance(attribute, property):
            return getattr(self._elements[0], name) if self._elements else None

        if not callable(attribute):
            raise AttributeError(f"No such method '{name}' on DOMElement")

        def dispatch(*args, **kwargs):
            if not self._elements:
                return self._empty_result(attribute)

            merged = None
            results = []

            for element in list(self._elements):
                result = getattr(element, name)(*args, **kwargs)
                if isinstance(result, DOMObject):
                    merged = (merged or []) + result._elements
                results.append(result)

            if merged is not None:
                return self._gather(merged)
            if all(result is None for result in results):
                return self
            return results[0]

        dispatch.__name__ = name
        return dispatch

    # Traversal

    def each(self, callback: Callable[['DOMObject'], Any]) -> 'DOMObject':
        """
        Call a function for every element of the set.

        Args:
            callback: Receives a one element DOMObject; returning False stops the loop

        Returns:
            DOMObject: This set, for method chaining

        Raises:
            TypeError: If callback is not callable
        """
        if not callable(callback):
            raise TypeError("Argument must be callable")

        for element in list(self._elements):
            if callback(self._spawn([element])) is False:
                break

        return self

    def filter(self, subject: Union[str, Callable[[DOMElement], bool]]) -> 'DOMObject':
        """
        Reduce the set to the elements matching a selector or a predicate.

        Args:
            subject: A CSS selector, or a function receiving each DOMElement

        Returns:
            DOMObject: The matching elements

        Raises:
            TypeError: If subject is neither a string nor callable
        """
        if isinstance(subject, str):
            matched = selector_engine.matching([element.node for element in self._elements], subject)
            return self._spawn([element for element in self._elements if element.node in matched])

        if callable(subject):
            return self._spawn([element for element in self._elements if subject(element)])

        raise TypeError("Invalid filter subject")

    def first(self) -> 'DOMObject':
        """The first element as a set, empty if this set is empty."""
        return self._spawn(self._elements[:1])

    def last(self) -> 'DOMObject':
        """The last element as a set, empty if this set is empty."""
        return self._spawn(self._elements[-1:])

    def eq(self, index: int) -> 'DOMObject':
        """The element at index as a set, empty if out of range."""
        element = self[index]
        return self._spawn([element] if element is not None else [])

    def find(self, selector: str) -> 'DOMObject':
        """
        Find descendants of the set matching a CSS selector.

        Args:
            selector: The CSS selector

        Returns:
            DOMObject: The matching descendants in document order
        """
        results: List[etree._Element] = []
        for element in self._elements:
            results.extend(selector_engine.select(selector, element.node))
        return self._gather(results)

    def _filtered(self, nodes: List[etree._Element], selector: Optional[str]) -> 'DOMObject':
        if selector:
            matched = selector_engine.matching(nodes, selector)
            nodes = [node for node in nodes if node in matched]
        return self._gather(nodes)

    def children(self, selector: Optional[str] = None) -> 'DOMObject':
        """
        Get the element children of the set.

        Args:
            selector: Only return children matching this CSS selector

        Returns:
            DOMObject: The children
        """
        nodes = []
        for element in self._elements:
            nodes.extend(element_children(element.node))
        return self._filtered(nodes, selector)

    def is_(self, subject: Union[str, 'DOMObject', DOMElement, etree._Element, Callable]) -> bool:
        """
        Check whether any element of the set matches the subject.

        Args:
            subject: A CSS selector, an element or set to look for, or a predicate

        Returns:
            bool: True if at least one element matches

        Raises:
            TypeError: If subject is not one of the supported types
        """
        if not self._elements:
            return False

        if isinstance(subject, str):
            return bool(selector_engine.matching([element.node for element in self._elements], subject))

        if isinstance(subject, (DOMObject, DOMElement, etree._Element)):
            others = DOMObject(subject)
            return any(element in others for element in self._elements)

        if callable(subject):
            return any(subject(element) for element in self._elements)

        raise TypeError("Argument must be a selector, an element, a DOMObject or callable")

    def is_document(self) -> bool:
        """Check whether this set holds exactly the root <html> element of a document."""
        if len(self._elements) != 1:
            return False
        node = self._elements[0].node
        return node.getparent() is None and local_name(node) == 'html'

    def contents(self) -> 'DOMObject':
        """
        Get the child nodes of the set.

        Text lives inside elements in lxml, so this returns element, comment
        and processing instruction children.
        """
        nodes = []
        for element in self._elements:
            nodes.extend(element.node)
        return self._spawn(nodes)

    def closest(self, selector: str) -> 'DOMObject':
        """
        Get, for each element, the nearest ancestor or self matching a selector.

        Args:
            selector: The CSS selector

        Returns:
            DOMObject: The matching elements

        Raises:
            ValueError: If selector is empty
        """
        if not selector:
            raise ValueError("Argument cannot be empty")

        lineages = []
        for element in self._elements:
            lineage = [element.node]
            lineage.extend(element.node.iterancestors())
            lineages.append(lineage)

        matched = selector_engine.matching([node for lineage in lineages for node in lineage], selector)

        results = []
        for lineage in lineages:
            for node in lineage:
                if node in matched:
                    results.append(node)
                    break

        return self._gather(results)

    def parent(self, selector: Optional[str] = None) -> 'DOMObject':
        """Get the parents of the set, optionally only those matching a selector."""
        nodes = [element.node.getparent() for element in self._elements]
        return self._filtered([node for node in nodes if node is not None], selector)

    def prev(self, selector: Optional[str] = None) -> 'DOMObject':
        """Get the immediately preceding element sibling of each element."""
        nodes = []
        for element in self._elements:
            for sibling in element.node.itersiblings(preceding=True):
                if is_element(sibling):
                    nodes.append(sibling)
                    break
        return self._filtered(nodes, selector)

    def prev_all(self, selector: Optional[str] = None) -> 'DOMObject':
        """Get all preceding element siblings of each element."""
        nodes = []
        for element in self._elements:
            nodes.extend(sibling for sibling in element.node.itersiblings(preceding=True)
                         if is_element(sibling))
        return self._filtered(nodes, selector)

    def next(self, selector: Optional[str] = None) -> 'DOMObject':
        """Get the immediately following element sibling of each element."""
        nodes = []
        for element in self._elements:
            for sibling in element.node.itersiblings():
                if is_element(sibling):
                    nodes.append(sibling)
                    break
        return self._filtered(nodes, selector)

    following = next

    def next_all(self, selector: Optional[str] = None) -> 'DOMObject':
        """Get all following element siblings of each element."""
        nodes = []
        for element in self._elements:
            nodes.extend(sibling for sibling in element.node.itersiblings() if is_element(sibling))
        return self._filtered(nodes, selector)

    def siblings(self, selector: Optional[str] = None) -> 'DOMObject':
        """Get all element siblings of each element, excluding the element itself."""
        nodes = []
        for element in self._elements:
            parent = element.node.getparent()
            if parent is None:
                continue
            nodes.extend(child for child in element_children(parent) if child is not element.node)
        return self._filtered(nodes, selector)

    # Getters and setters

    def css(self, name: Union[None, str, Mapping[str, Any]] = None, value: Any = UNDEFINED):
        """
        Get or set inline styles.

        Only inline styles are supported, computed styles are not available.

        Args:
            name: A property name, a mapping of properties to set, or None to
                get every inline style of the first element
            value: Value to set; None or "" removes the property

        Returns:
            The value (or None) when getting, this set when setting

        Raises:
            TypeError: If the arguments have unsupported types
            ValueError: If a value is given along with a mapping or no name
        """
        if name is None:
            if value is not UNDEFINED:
                raise ValueError("A value cannot be supplied without a property name")
            return self._elements[0].get_inline_styles() if self._elements else None

        if isinstance(name, str):
            if value is UNDEFINED:
                return self._elements[0].get_inline_style(name) if self._elements else None

            if value is not None and not isinstance(value, str):
                raise TypeError("When a property name is supplied, the value must be a string or None")

            for element in self._elements:
                if value:
                    element.set_inline_style(name, value)
                else:
                    element.remove_inline_style(name)
            return self

        if isinstance(name, Mapping):
            if value is not UNDEFINED:
                raise ValueError("A value cannot be supplied along with a mapping of properties")

            for element in self._elements:
                for key, item in name.items():
                    if item:
                        element.set_inline_style(key, str(item))
                    else:
                        element.remove_inline_style(key)
            return self

        raise TypeError("Invalid argument")

    def hide(self) -> 'DOMObject':
        """Hide the set with an inline display: none."""
        return self.css({'display': 'none'})

    def show(self) -> 'DOMObject':
        """Remove the inline display property from the set."""
        return self.css({'display': ''})

    def text(self, value: Any = None):
        """
        Get the text of every element, or replace the content of every element with text.

        Args:
            value: None to get, a scalar to set

        Returns:
            str when getting, this set when setting

        Raises:
            TypeError: If value is not a scalar
        """
        if value is None:
            return "".join(element.text_content for element in self._elements)

        _check_scalar(value, "Input must be scalar")

        self.clear()

        if value == "":
            return self

        for element in self._elements:
            append_text(element.node, str(value))

        return self

    def html(self, markup: Optional[str] = None):
        """
        Get the inner HTML of the first element, or set the inner HTML of every element.

        Args:
            markup: None to get, an HTML fragment to set

        Returns:
            str (None for an empty set) when getting, this set when setting

        Raises:
            TypeError: If markup is not a string
        """
        if markup is None:
            if not self._elements:
                return None
            return self._elements[0].inner_html

        if not isinstance(markup, str):
            raise TypeError("Markup must be a string")

        self.clear()

        if markup == "":
            return self

        for element in self._elements:
            container = local_name(element.node)
            if container not in FRAGMENT_CONTAINERS:
                container = 'div'

            append_fragment(element.node, _html_parser.parse_fragment(markup, container=container))

        return self

    def val(self, value: Any = None):
        """
        Get the value of the first form element, or set the value of every element.

        Args:
            value: None to get, a scalar to set

        Returns:
            The value (or None) when getting, this set when setting
        """
        if value is None:
            if not self._elements:
                return None
            return self._get_value(self._elements[0])

        _check_scalar(value, "Value must be scalar")
        value = str(value)

        for element in self._elements:
            name = element.tag_name

            if name == 'textarea':
                clear_children(element.node)
                append_text(element.node, value)
            elif name == 'select':
                self._select_option(element, value)
            elif name == 'input':
                element.set_attribute('value', value)
            else:
                clear_children(element.node)
                element.node.text = value

        return self

    @staticmethod
    def _option_value(option: etree._Element) -> str:
        if 'value' in option.attrib:
            return option.get('value')
        return text_content(option).strip()

    def _get_value(self, element: DOMElement) -> Optional[str]:
        name = element.tag_name

        if name == 'input':
            # No value attribute reads as None rather than an empty string
            return element.get_attribute('value') or None

        if name == 'select':
            option = element.query_selector('option[selected]')
            if option is None:
                return None
            return self._option_value(option.node)

        if name == 'option':
            return self._option_value(element.node)

        return element.text_content

    def _select_option(self, element: DOMElement, value: str) -> None:
        options = selector_engine.select('option', element.node)

        for option in options:
            if 'selected' in option.attrib:
                del option.attrib['selected']

        for option in options:
            if self._option_value(option) == value:
                option.set('selected', 'selected')
                return

        logger.warning(f'Option with value "{value}" not found in "{element.get_attribute("name")}"')

    def has_class(self, name: str) -> bool:
        """
        Check whether any element has a class.

        Args:
            name: The class name

        Returns:
            bool: True if at least one element has the class
        """
        for element in self._elements:
            if name in (element.get_attribute('class') or '').split():
                return True
        return False

    def add_class(self, names: str) -> 'DOMObject':
        """
        Add space separated classes to every element.

        Args:
            names: The class names

        Returns:
            DOMObject: This set, for method chaining
        """
        tokens = names.split()
        for element in self._elements:
            classes = (element.get_attribute('class') or '').split()
            for token in tokens:
                if token not in classes:
                    classes.append(token)
            element.set_attribute('class', ' '.join(classes))
        return self

    def remove_class(self, names: str) -> 'DOMObject':
        """
        Remove space separated classes from every element.

        Args:
            names: The class names

        Returns:
            DOMObject: This set, for method chaining
        """
        tokens = set(names.split())
        for element in self._elements:
            if not element.has_attribute('class'):
                continue
            classes = [token for token in element.get_attribute('class').split() if token not in tokens]
            element.set_attribute('class', ' '.join(classes))
        return self

    def attr(self, name: Union[str, Mapping[str, Any]], value: Any = UNDEFINED):
        """
        Get or set attributes.

        True sets an attribute to its own name, False or None removes it.

        Args:
            name: An attribute name, or a mapping of attributes to set
            value: The value to set

        Returns:
            The value (None when absent) when getting, this set when setting

        Raises:
            ValueError: If name is empty, or a value is given along with a mapping
            TypeError: If the arguments have unsupported types
        """
        if not name:
            raise ValueError("Method must be called with at least one argument")

        if isinstance(name, str):
            if value is UNDEFINED:
                return self._elements[0].get_attribute(name) if self._elements else None
            attributes = {name: value}
        elif isinstance(name, Mapping):
            if value is not UNDEFINED:
                raise ValueError("A second argument cannot be provided when the first argument "
                                 "is a mapping of attributes to set")
            attributes = dict(name)
        else:
            raise TypeError("First argument must be a string attribute name, "
                            "or a mapping of attributes to set")

        for key, item in attributes.items():
            if not isinstance(key, str):
                raise TypeError("Attribute names must be strings")
            if item is not None:
                _check_scalar(item, "Attribute values must be scalar")

        for element in self._elements:
            for key, item in attributes.items():
                if item is True:
                    element.set_attribute(key, key)
                elif item is False or item is None:
                    element.remove_attribute(key)
                else:
                    element.set_attribute(key, str(item))

        return self

    def prop(self, name: str, value: Any = UNDEFINED):
        """
        Get or set a boolean attribute such as checked or disabled.

        Args:
            name: The attribute name
            value: Truthy to set the attribute, falsy to remove it

        Returns:
            bool (None for an empty set) when getting, this set when setting
        """
        if value is UNDEFINED:
            if not self._elements:
                return None
            return self._elements[0].has_attribute(name)

        for element in self._elements:
            if value:
                element.set_attribute(name, name)
            else:
                element.remove_attribute(name)

        return self

    def remove_attr(self, names: str) -> 'DOMObject':
        """Remove space separated attributes from every element."""
        for element in self._elements:
            for name in names.split():
                element.remove_attribute(name)
        return self

    def data(self, name: Union[None, str, Mapping[str, Any]] = None, value: Any = UNDEFINED):
        """
        Get or set data- attributes.

        Args:
            name: None to get all data of the first element, a name to get or
                set one value, or a mapping of values to set
            value: The value to set

        Returns:
            Dict[str, str], str or None when getting, this set when setting

        Raises:
            ValueError: For a value without a name, or a value along with a mapping
            TypeError: If the arguments have unsupported types
        """
        if name is None:
            if value is not UNDEFINED and value is not None:
                raise ValueError("Argument is None but value is provided, invalid arguments")
            if not self._elements:
                return None
            return {key[5:]: item for key, item in self._elements[0].attributes.items()
                    if key.startswith('data-')}

        if isinstance(name, str):
            if value is UNDEFINED or value is None:
                return self._elements[0].get_attribute(f"data-{name}") if self._elements else None
            _check_scalar(value, "Invalid arguments")
            for element in self._elements:
                element.set_attribute(f"data-{name}", str(value))
            return self

        if isinstance(name, Mapping):
            if value is not UNDEFINED and value is not None:
                raise ValueError("Argument is a mapping, a second argument should not be provided")
            for item in name.values():
                _check_scalar(item, "Data values must be scalar")
            for element in self._elements:
                for key, item in name.items():
                    element.set_attribute(f"data-{key}", str(item))
            return self

        raise TypeError("Invalid arguments")

    # Mutation

    def clear(self) -> 'DOMObject':
        """Remove all children and text of every element."""
        for element in self._elements:
            clear_children(element.node)
        return self

    empty = clear

    def remove(self) -> 'DOMObject':
        """Remove every element of the set from its tree."""
        for element in self._elements:
            detach(element.node)
        return self

    def duplicate(self) -> 'DOMObject':
        """Return deep copies of the elements of the set."""
        return self._spawn([clone_node(element.node) for element in self._elements])

    clone = duplicate

    def _template(self, template: Union[str, Subject]) -> etree._Element:
        if isinstance(template, str):
            nodes = [node for node in _html_parser.parse_fragment(template) if is_element(node)]
        else:
            nodes = _nodes_of(template)
        if not nodes:
            raise ValueError("Wrapper template is empty")
        return nodes[0]

    def wrap(self, template: Union[str, Subject]) -> 'DOMObject':
        """
        Wrap every element of the set in a copy of the template.

        With a single element the template itself is used. Only the first
        element of a set or markup template is used.

        Args:
            template: Wrapper element, set or markup

        Returns:
            DOMObject: This set, for method chaining
        """
        template = self._template(template)
        single = len(self._elements) == 1

        for element in self._elements:
            if element.node.getparent() is None:
                raise ValueError("Cannot wrap an element without a parent")
            wrapper = template if single else clone_node(template)
            insert_before(element.node, wrapper)
            append_node(wrapper, element.node)

        return self

    def wrap_inner(self, template: Union[str, Subject]) -> 'DOMObject':
        """
        Wrap the content of every element of the set in a copy of the template.

        Args:
            template: Wrapper element, set or markup

        Returns:
            DOMObject: This set, for method chaining
        """
        template = self._template(template)
        single = len(self._elements) == 1

        for element in self._elements:
            wrapper = template if single else clone_node(template)
            detach(wrapper)

            text = element.node.text
            element.node.text = None
            if text:
                append_text(wrapper, text)
            for child in list(element.node):
                wrapper.append(child)

            element.node.append(wrapper)

        return self

    def after(self, subject: Union[str, Subject]) -> 'DOMObject':
        """
        Insert text or copies of elements after every element of the set.

        Args:
            subject: Text, or the element(s) to insert

        Returns:
            DOMObject: This set, for method chaining
        """
        if isinstance(subject, str):
            for element in self._elements:
                insert_text_after(element.node, subject)
            return self

        nodes = _nodes_of(subject)
        for element in self._elements:
            insert_all_after(element.node, [clone_node(node) for node in nodes])

        return self

    def before(self, subject: Union[str, Subject]) -> 'DOMObject':
        """
        Insert text or copies of elements before every element of the set.

        Args:
            subject: Text, or the element(s) to insert

        Returns:
            DOMObject: This set, for method chaining
        """
        if isinstance(subject, str):
            for element in self._elements:
                insert_text_before(element.node, subject)
            return self

        nodes = _nodes_of(subject)
        for element in self._elements:
            for node in nodes:
                insert_before(element.node, clone_node(node))

        return self

    def append(self, subject: Union[str, Subject]) -> 'DOMObject':
        """
        Append text or elements inside every element of the set.

        Elements are moved when the set holds a single element, and copied
        into each element otherwise.

        Args:
            subject: Text, or the element(s) to append

        Returns:
            DOMObject: This set, for method chaining
        """
        if isinstance(subject, str):
            for element in self._elements:
                append_text(element.node, subject)
            return self

        nodes = _nodes_of(subject)
        single = len(self._elements) == 1

        for element in self._elements:
            for node in nodes:
                append_node(element.node, node if single else clone_node(node))

        return self

    def prepend(self, subject: Union[str, Subject]) -> 'DOMObject':
        """
        Insert text or elements at the start of every element of the set.

        Args:
            subject: Text, or the element(s) to prepend

        Returns:
            DOMObject: This set, for method chaining
        """
        if isinstance(subject, str):
            for element in self._elements:
                prepend_text(element.node, subject)
            return self

        nodes = _nodes_of(subject)
        single = len(self._elements) == 1

        for element in self._elements:
            prepend_nodes(element.node, nodes if single else [clone_node(node) for node in nodes])

        return self

    def replace_with(self, subject: Union[str, Subject]) -> 'DOMObject':
        """
        Replace every element of the set with text or copies of elements.

        Args:
            subject: Text, or the replacement element(s)

        Returns:
            DOMObject: This set, now detached from the tree
        """
        if isinstance(subject, str):
            for element in self._elements:
                insert_text_before(element.node, subject)
                detach(element.node)
            return self

        nodes = _nodes_of(subject)
        for element in self._elements:
            replace_node(element.node, [clone_node(node) for node in nodes])

        return self

    def import_(self, subject: Any) -> 'DOMObject':
        """
        Import markup, elements or a document and append the result to the set.

        Text around the top level elements of markup or a document body is
        imported too. Does nothing when the set is empty.

        Args:
            subject: HTML string, DOMElement, DOMObject or DOMDocument

        Returns:
            DOMObject: This set, for method chaining
        """
        if not self._elements:
            return self

        from dom_document.dom.document import DOMDocument

        fragment = DOMDocument.import_fragment(subject)
        single = len(self._elements) == 1
        for element in self._elements:
            append_fragment(element.node, fragment, copy_nodes=not single)

        return self
