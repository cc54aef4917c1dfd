"""
dom-document - jQuery style traversal and manipulation for HTML5 documents.
"""

from dom_document.utils.logging import setup_logging

# Set up basic logging
logger = setup_logging()

from dom_document.dom import (  # noqa: E402
    DOMDocument,
    DOMElement,
    DOMObject,
    DOMQueryResults,
    ParseOption,
    UNDEFINED,
)

# Package information
__version__ = "2.0.0"
__author__ = "dom-document contributors"
__description__ = "jQuery style traversal and manipulation for HTML5 documents"

__all__ = [
    'DOMDocument',
    'DOMElement',
    'DOMObject',
    'DOMQueryResults',
    'ParseOption',
    'UNDEFINED',
]

logger.debug(f"dom-document v{__version__} initialized")
