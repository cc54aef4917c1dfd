"""
CSS parser implementation.
This module handles style attributes and stylesheets, the latter through cssutils.
"""

import logging
from typing import Dict, Mapping

import cssutils

# Suppress cssutils warning logs
cssutils.log.setLevel(logging.CRITICAL)

logger = logging.getLogger(__name__)


class CSSParser:
    """CSS parser for inline declarations and stylesheets."""

    def __init__(self):
        """Initialize the CSS parser."""
        cssutils.ser.prefs.useMinified = False
        cssutils.ser.prefs.keepComments = False
        cssutils.ser.prefs.minimizeColorHash = False

        logger.debug("CSS parser initialized")

    def parse(self, css_content: str) -> cssutils.css.CSSStyleSheet:
        """
        Parse CSS content into a stylesheet.

        Args:
            css_content: CSS content to parse

        Returns:
            cssutils.css.CSSStyleSheet: Parsed stylesheet
        """
        try:
            return cssutils.parseString(css_content)
        except Exception as e:
            logger.error(f"Error parsing CSS: {e}")
            # Return an empty stylesheet
            return cssutils.css.CSSStyleSheet()

    def extract_styles(self, stylesheet: cssutils.css.CSSStyleSheet) -> Dict[str, Dict[str, str]]:
        """
        Extract styles from a stylesheet organized by selector.

        Args:
            stylesheet: CSS stylesheet

        Returns:
            Dict[str, Dict[str, str]]: Dictionary of styles by selector, in rule order
        """
        styles: Dict[str, Dict[str, str]] = {}

        for rule in stylesheet.cssRules:
            if rule.type != cssutils.css.CSSRule.STYLE_RULE:
                continue

            selector = rule.selectorText
            properties = {}

            for prop in rule.style:
                if prop.name and prop.value:
                    properties[prop.name.lower()] = prop.value

            if selector in styles:
                # Merge with existing styles
                styles[selector].update(properties)
            else:
                styles[selector] = properties

        return styles

    def parse_inline_styles(self, style_attr: str) -> Dict[str, str]:
        """
        Parse inline styles from a style attribute.

        Args:
            style_attr: Style attribute value

        Returns:
            Dict[str, str]: CSS properties and values in declaration order
        """
        styles = {}

        if not style_attr:
            return styles

        # Split by semicolons and extract property-value pairs
        for declaration in style_attr.split(';'):
            if ':' in declaration:
                property_name, property_value = declaration.split(':', 1)
                property_name = property_name.strip()
                property_value = property_value.strip()
                if property_name:
                    styles[property_name] = property_value

        return styles

    def serialize_inline_styles(self, styles: Mapping[str, str]) -> str:
        """
        Build a style attribute value.

        Args:
            styles: CSS properties and values

        Returns:
            str: Declarations joined as "name: value; name: value"
        """
        return "; ".join(f"{name}: {value}" for name, value in styles.items())
