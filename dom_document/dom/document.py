"""
Document implementation for the DOM.
This module implements DOMDocument, which owns the parse and serialize entry
points and forwards everything else to a result set holding its root element.
"""

import copy
import logging
import os
import re
from enum import IntFlag
from typing import Any, Callable, Dict, List, Optional, Union

from lxml import etree

from dom_document.dom.dom_object import DOMObject, UNDEFINED
from dom_document.dom.element import DOMElement
from dom_document.dom.node import clone_node, local_name
from dom_document.parser.html_parser import HTMLParser
from dom_document.utils.config import Config, get_config
from dom_document.utils.entities import convert_utf8_to_html_entities
from dom_document.utils.logging import PerformanceLogger

logger = logging.getLogger(__name__)

_DOCTYPE_PATTERN = re.compile(r'<!DOCTYPE', re.IGNORECASE)


class ParseOption(IntFlag):
    """Options for DOMDocument.load_html."""
    NONE = 0
    # Keep HTML elements out of the XHTML namespace
    DISABLE_HTML_NS = 2


class DOMDocument:
    """
    An HTML5 document.

    Result set methods called on the document run against its root element:

        document = DOMDocument('<ul><li>One</li><li>Two</li></ul>')
        document.find('li').add_class('item')
    """

    UNDEFINED = UNDEFINED

    convert_utf8_to_html_entities = staticmethod(convert_utf8_to_html_entities)

    def __init__(self, src: Optional[str] = None,
                 options: int = ParseOption.DISABLE_HTML_NS,
                 config: Optional[Config] = None):
        """
        Initialize a document.

        Args:
            src: HTML source to load straight away
            options: ParseOption flags used when src is given
            config: Configuration, the shared one by default
        """
        self.config = config or get_config()
        self.parser = HTMLParser(self.config.get_section('serializer'))
        self.tree: Optional[etree._ElementTree] = None
        self.errors: List[str] = []
        self.performance = PerformanceLogger(logger, "DOMDocument")

        if src is not None:
            self.load_html(src, options)

    def __getattr__(self, name: str):
        if name.startswith('_'):
            raise AttributeError(name)

        if name in ('query_selector', 'query_selector_all'):
            logger.warning(f"{name} is deprecated on DOMDocument. "
                           "It is recommended to use DOMDocument.find instead")
            name = 'find'

        if getattr(DOMObject, name, None) is None:
            raise AttributeError(f"No such method {name}")

        return getattr(DOMObject([self.get_document_element_safe()], config=self.config), name)

    def __str__(self) -> str:
        return self.save_html()

    def __repr__(self) -> str:
        root = self.document_element
        return f"<DOMDocument root={local_name(root) if root is not None else None}>"

    # Loading

    def load_html(self, src: str, options: int = ParseOption.DISABLE_HTML_NS) -> bool:
        """
        Load an HTML string.

        Args:
            src: The HTML source
            options: ParseOption flags

        Returns:
            bool: True

        Raises:
            TypeError: If src is not a string
        """
        if not isinstance(src, str):
            raise TypeError("HTML source must be a string")

        # Assume HTML5 for fragments so the parser does not complain about quirks mode
        if self.config.get('parser.add_doctype', True) and not _DOCTYPE_PATTERN.match(src.lstrip('\ufeff')):
            src = f"<!DOCTYPE html>{src}"

        with self.performance.measure("parse"):
            tree, errors = self.parser.parse_document(
                src,
                namespace_html_elements=not (options & ParseOption.DISABLE_HTML_NS),
                fallback=self.config.get('parser.fallback', True)
            )

        self.tree = tree
        self.errors = [HTMLParser.format_error(error) for error in errors]

        if self.config.get('parser.report_errors', True):
            for message in self.errors:
                logger.warning(f"HTML parse error at {message}")

        self.on_loaded()

        return True

    def load(self, filename: Union[str, os.PathLike], options: int = ParseOption.DISABLE_HTML_NS) -> bool:
        """
        Load an HTML file.

        Args:
            filename: Path of the file to read
            options: ParseOption flags

        Returns:
            bool: True

        Raises:
            TypeError: If filename is not a path
            FileNotFoundError: If the file does not exist
        """
        if not isinstance(filename, (str, os.PathLike)):
            raise TypeError("Filename must be a string or path")

        if not os.path.isfile(filename):
            raise FileNotFoundError(f"File {filename} not found")

        with open(filename, 'r', encoding='utf-8') as f:
            contents = f.read()

        logger.debug(f"Loading HTML from {filename}")
        return self.load_html(contents, options)

    load_html_file = load

    def on_loaded(self) -> None:
        """Hook called after a document is parsed, before load_html returns."""

    # Saving

    def save_html(self, element: Optional[Union[DOMElement, DOMObject, etree._Element]] = None,
                  options: Optional[Dict[str, Any]] = None) -> str:
        """
        Serialize the document, or part of it, to HTML5.

        Args:
            element: Element or set to serialize, the whole document by default
            options: html5lib serializer options for this call

        Returns:
            str: The markup
        """
        options = options or {}

        if element is None:
            if self.tree is None:
                return ''
            return self.parser.serialize(self.tree, **options)

        if isinstance(element, DOMObject):
            return "".join(self.parser.serialize(item.node, **options) for item in element)

        if isinstance(element, DOMElement):
            element = element.node

        return self.parser.serialize(element, **options)

    def save(self, filename: Union[str, os.PathLike], options: Optional[Dict[str, Any]] = None) -> int:
        """
        Save the document as HTML5.

        Args:
            filename: Path of the file to write
            options: html5lib serializer options

        Returns:
            int: Size of the written file in bytes
        """
        with open(filename, 'w', encoding='utf-8') as f:
            f.write(self.save_html(options=options))

        size = os.path.getsize(filename)
        logger.debug(f"Saved {size} bytes to {filename}")
        return size

    def save_inner_body(self) -> str:
        """
        Serialize the content of <body>.

        Useful for documents holding components rather than whole pages.

        Returns:
            str: The markup inside <body>, or inside the root element if there is no body
        """
        body = self._body_node()
        return self.parser.serialize_inner(body)

    @property
    def html(self) -> str:
        """The markup inside <body>."""
        return self.save_inner_body()

    @property
    def body(self) -> DOMObject:
        """The <body> element as a set."""
        return DOMObject([node for node in [self._body_node()] if local_name(node) == 'body'],
                         config=self.config)

    # Document element

    @property
    def document_element(self) -> Optional[etree._Element]:
        """The root element, None before anything is loaded."""
        if self.tree is None:
            return None
        return self.tree.getroot()

    def get_document_element_safe(self) -> etree._Element:
        """
        Get the root element.

        Returns:
            etree._Element: The root element

        Raises:
            ValueError: If the document is empty
        """
        root = self.document_element
        if root is None:
            raise ValueError("Document is empty")
        return root

    def _body_node(self) -> etree._Element:
        root = self.get_document_element_safe()
        for node in root.iter():
            if local_name(node) == 'body':
                return node
        return root

    # Creating content

    @staticmethod
    def import_nodes(subject: Any) -> List[etree._Element]:
        """
        Get detached copies of the nodes described by subject.

        Args:
            subject: HTML string (its body content is used), DOMDocument (body
                content), DOMElement, lxml element or DOMObject

        Returns:
            List[etree._Element]: Copies ready to be inserted anywhere

        Raises:
            TypeError: If subject is of an unsupported type
        """
        if isinstance(subject, str):
            subject = DOMDocument(subject)

        if isinstance(subject, DOMDocument):
            return [clone_node(node) for node in subject._body_node()]

        if isinstance(subject, DOMElement):
            return [clone_node(subject.node)]

        if isinstance(subject, etree._Element):
            return [clone_node(subject)]

        if isinstance(subject, DOMObject):
            return [clone_node(element.node) for element in subject]

        raise TypeError("Subject must be an HTML string, DOMDocument, DOMElement or DOMObject")

    @staticmethod
    def import_fragment(subject: Any) -> List[Union[str, etree._Element]]:
        """
        Like import_nodes, but keep the text between the top level nodes of
        markup or a document body.

        Returns:
            List: Leading text (if any) followed by detached copies that keep
            their tail text
        """
        if isinstance(subject, str):
            subject = DOMDocument(subject)

        if not isinstance(subject, DOMDocument):
            return list(DOMDocument.import_nodes(subject))

        body = subject._body_node()
        fragment: List[Union[str, etree._Element]] = [body.text] if body.text else []
        fragment.extend(copy.deepcopy(node) for node in body)
        return fragment

    def import_(self, subject: Any) -> DOMObject:
        """
        Import content for use in this document.

        Args:
            subject: HTML string, DOMDocument, DOMElement or DOMObject

        Returns:
            DOMObject: The imported nodes
        """
        return DOMObject(self.import_nodes(subject), config=self.config)

    def create(self, html: str) -> DOMObject:
        """
        Create nodes from an HTML fragment.

        Args:
            html: The HTML source

        Returns:
            DOMObject: The top level nodes of the fragment
        """
        nodes = self.parser.parse_fragment(html.strip())
        return DOMObject([clone_node(node) for node in nodes if not isinstance(node, str)],
                         config=self.config)

    def shorthand(self) -> Callable[[Any], DOMObject]:
        """
        Get a jQuery like function for this document.

        The function creates nodes from markup, finds elements for any other
        string, and wraps anything else in a DOMObject:

            _ = document.shorthand()
            _('<div>Example</div>')
            _('.items > li')

        Returns:
            Callable: The shorthand function
        """
        def shorthand(subject: Any) -> DOMObject:
            if isinstance(subject, str):
                if subject.lstrip().startswith('<'):
                    return self.create(subject)
                return self.find(subject)
            return DOMObject(subject, config=self.config)

        return shorthand
