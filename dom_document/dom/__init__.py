"""
DOM convenience layer over lxml.
This package provides the element wrapper, the result set and the document facade.
"""

from .element import DOMElement
from .dom_object import DOMObject, UNDEFINED
from .document import DOMDocument, ParseOption
from .selector_engine import SelectorEngine, selector_engine

# Name used by earlier releases for the result set
DOMQueryResults = DOMObject

__all__ = [
    'DOMDocument',
    'DOMElement',
    'DOMObject',
    'DOMQueryResults',
    'ParseOption',
    'SelectorEngine',
    'UNDEFINED',
    'selector_engine',
]
