"""
Parsers for HTML and CSS.
"""

from dom_document.parser.css_parser import CSSParser
from dom_document.parser.html_parser import HTMLParser, HTML5_VOID_ELEMENTS

__all__ = [
    'CSSParser',
    'HTMLParser',
    'HTML5_VOID_ELEMENTS',
]
