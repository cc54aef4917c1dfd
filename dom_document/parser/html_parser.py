"""
HTML parser implementation.
This module parses HTML5 source into lxml trees and serializes them back,
using html5lib for both directions.
"""

import copy
import logging
from typing import Any, Dict, List, Optional, Tuple, Union

import html5lib
from html5lib.constants import E as HTML5_ERROR_MESSAGES
from lxml import etree
from lxml.html import soupparser

logger = logging.getLogger(__name__)

# Set of HTML5 void elements (self-closing tags)
HTML5_VOID_ELEMENTS = {
    'area', 'base', 'br', 'col', 'embed', 'hr', 'img', 'input',
    'link', 'meta', 'param', 'source', 'track', 'wbr'
}

DEFAULT_SERIALIZER_OPTIONS: Dict[str, Any] = {
    'omit_optional_tags': False,
    'quote_attr_values': 'always',
    'minimize_boolean_attributes': True,
    'use_trailing_solidus': False,
    'alphabetical_attributes': False,
}

ParseError = Tuple[Tuple[int, int], str, Dict[str, Any]]


class HTMLParser:
    """HTML parser using html5lib with the lxml tree builder."""

    def __init__(self, serializer_options: Optional[Dict[str, Any]] = None):
        """
        Initialize the HTML parser.

        Args:
            serializer_options: html5lib serializer options overriding the defaults
        """
        self.serializer_options = dict(DEFAULT_SERIALIZER_OPTIONS)
        if serializer_options:
            self.serializer_options.update(serializer_options)

        logger.debug("HTML parser initialized with html5lib")

    def parse_document(self, html_content: str,
                       namespace_html_elements: bool = False,
                       fallback: bool = True) -> Tuple[etree._ElementTree, List[ParseError]]:
        """
        Parse a complete HTML document.

        Args:
            html_content: HTML content to parse
            namespace_html_elements: Put HTML elements in the XHTML namespace
            fallback: Re-parse with BeautifulSoup if html5lib raises

        Returns:
            Tuple: The parsed tree and the list of html5lib parse errors
        """
        html_content = self._clean_html_content(html_content)

        parser = html5lib.HTMLParser(tree=html5lib.getTreeBuilder("lxml"),
                                     namespaceHTMLElements=namespace_html_elements)
        try:
            tree = parser.parse(html_content)
        except Exception as e:
            if not fallback:
                logger.error(f"Error parsing HTML: {e}")
                raise
            logger.warning(f"html5lib parser failed: {e}, falling back to BeautifulSoup")
            root = soupparser.fromstring(html_content, features='html.parser')
            return root.getroottree(), []

        return tree, list(parser.errors)

    def parse_fragment(self, html_content: str, container: str = 'div') -> List[Union[str, etree._Element]]:
        """
        Parse an HTML fragment as the content of a container element.

        Args:
            html_content: Fragment markup
            container: Name of the element the fragment is parsed inside

        Returns:
            List: Leading text (if any) followed by the top level nodes, which
            keep their tail text
        """
        parser = html5lib.HTMLParser(tree=html5lib.getTreeBuilder("lxml"),
                                     namespaceHTMLElements=False)
        return parser.parseFragment(self._clean_html_content(html_content), container=container)

    def serialize(self, subject: Union[etree._ElementTree, etree._Element], **options) -> str:
        """
        Serialize a tree or a single node to HTML5.

        Args:
            subject: A whole tree (doctype included) or a node
            **options: html5lib serializer options for this call

        Returns:
            str: The markup
        """
        opts = dict(self.serializer_options)
        opts.update(options)

        if not isinstance(subject, etree._ElementTree):
            # The lxml tree walker emits siblings and tail text of the node it is
            # given, so serialize a standalone copy.
            subject = copy.deepcopy(subject)
            subject.tail = None

        return html5lib.serialize(subject, tree='lxml', **opts)

    def serialize_inner(self, node: etree._Element, **options) -> str:
        """
        Serialize the children of a node.

        Args:
            node: The parent node
            **options: html5lib serializer options for this call

        Returns:
            str: The markup of the node's content
        """
        if not isinstance(node.tag, str):
            return ''
        if etree.QName(node).localname.lower() in HTML5_VOID_ELEMENTS:
            return ''

        shell = copy.deepcopy(node)
        shell.tail = None
        shell.attrib.clear()

        options['omit_optional_tags'] = False
        markup = self.serialize(shell, **options)

        start = markup.find('>') + 1
        end = markup.rfind('</')
        if start <= 0 or end < start:
            return ''
        return markup[start:end]

    @staticmethod
    def format_error(error: ParseError) -> str:
        """
        Format one html5lib parse error.

        Args:
            error: A (position, code, data) triple from html5lib

        Returns:
            str: Human readable message with line and column
        """
        (line, column), code, data = error
        message = HTML5_ERROR_MESSAGES.get(code, code)
        if data:
            message = message % data
        return f"line {line}, column {column}: {message}"

    def _clean_html_content(self, html_content: str) -> str:
        """
        Clean HTML content to prevent parsing issues.

        Args:
            html_content: HTML content to clean

        Returns:
            str: Cleaned HTML content
        """
        if html_content.startswith('\ufeff'):
            logger.debug("Removing BOM marker from the beginning of HTML content")
            html_content = html_content[1:]

        if '\x00' in html_content:
            html_content = html_content.replace('\x00', '')

        return html_content
