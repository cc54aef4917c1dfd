"""
Utility modules for dom-document.
"""

from dom_document.utils.config import Config, get_config
from dom_document.utils.entities import convert_utf8_to_html_entities
from dom_document.utils.logging import setup_logging, log_exception, PerformanceLogger

__all__ = [
    'Config',
    'get_config',
    'convert_utf8_to_html_entities',
    'setup_logging',
    'log_exception',
    'PerformanceLogger',
]
