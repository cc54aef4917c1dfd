#!/usr/bin/env python3
"""
dom-document command line.

Query documents with CSS selectors, or inline a stylesheet into a document.
"""

import argparse
import logging
import sys
from typing import List, Optional

from dom_document.dom.document import DOMDocument
from dom_document.parser.css_parser import CSSParser
from dom_document.utils.config import get_config
from dom_document.utils.entities import convert_utf8_to_html_entities
from dom_document.utils.logging import log_exception, set_console_level

logger = logging.getLogger(__name__)


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="dom-document",
        description="jQuery style queries and manipulation for HTML5 documents"
    )
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')

    subparsers = parser.add_subparsers(dest='command', required=True)

    query = subparsers.add_parser('query', help='Print the elements matching a CSS selector')
    query.add_argument('file', help='HTML file to read')
    query.add_argument('selector', help='CSS selector')
    query.add_argument('--text', action='store_true', help='Print text content instead of markup')

    inline = subparsers.add_parser('inline-styles', help='Apply a stylesheet as inline styles')
    inline.add_argument('html', help='HTML file to read')
    inline.add_argument('css', help='CSS file to apply')
    inline.add_argument('-o', '--output', default=None, help='Write the result to a file instead of stdout')
    inline.add_argument('--entities', action='store_true',
                        help='Encode non ASCII characters as numeric entities')

    return parser.parse_args(argv)


def run_query(args: argparse.Namespace) -> int:
    """Print every element of a file matching a selector."""
    document = DOMDocument()
    document.load(args.file)

    results = document.find(args.selector)
    logger.debug(f"Selector '{args.selector}' matched {len(results)} elements")

    for element in results:
        print(element.text_content if args.text else element.outer_html)

    return 0 if len(results) else 1


def run_inline_styles(args: argparse.Namespace) -> int:
    """Apply every rule of a stylesheet to the matching elements as inline styles."""
    document = DOMDocument()
    document.load(args.html)

    css_parser = CSSParser()
    with open(args.css, 'r', encoding='utf-8') as f:
        stylesheet = css_parser.parse(f.read())

    for selector, properties in css_parser.extract_styles(stylesheet).items():
        try:
            document.find(selector).css(properties)
        except ValueError as e:
            logger.warning(f"Skipping rule '{selector}': {e}")

    output = document.save_html()
    if args.entities:
        output = convert_utf8_to_html_entities(output)

    if args.output:
        with open(args.output, 'w', encoding='utf-8') as f:
            f.write(output)
        logger.info(f"Wrote {args.output}")
    else:
        sys.stdout.write(output)

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the command line."""
    args = parse_arguments(argv)

    set_console_level("DEBUG" if args.debug else get_config().get('logging.console_level', 'WARNING'))

    commands = {
        'query': run_query,
        'inline-styles': run_inline_styles,
    }

    try:
        return commands[args.command](args)
    except (OSError, ValueError) as e:
        log_exception(logger, e, f"{args.command} failed")
        return 2


if __name__ == "__main__":
    sys.exit(main())
