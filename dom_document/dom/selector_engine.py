"""
CSS Selector Engine implementation.
This module compiles CSS selectors to XPath with cssselect and runs them with lxml.
"""

import logging
from typing import Dict, Iterable, List, Set, Tuple

import cssselect
from lxml import etree

from dom_document.dom.node import is_element, root_of

logger = logging.getLogger(__name__)

XHTML_NAMESPACE = 'http://www.w3.org/1999/xhtml'

# Axis used to search below a context node
DESCENDANT_AXIS = 'descendant::'
# Axis used to test membership, evaluated from the tree root
MEMBERSHIP_AXIS = 'descendant-or-self::'


class SelectorEngine:
    """
    CSS Selector Engine for DOM queries.

    Selectors are translated with cssselect's HTMLTranslator, so HTML specific
    pseudo classes such as :checked, :disabled and :link are available.
    """

    MAX_CACHE_SIZE = 512

    def __init__(self):
        """Initialize the selector engine."""
        self.translator = cssselect.HTMLTranslator()

        # Cache for compiled selectors
        self._selector_cache: Dict[Tuple[str, str], etree.XPath] = {}

        logger.debug("SelectorEngine initialized")

    def compile(self, selector: str, axis: str = MEMBERSHIP_AXIS) -> etree.XPath:
        """
        Compile a CSS selector to an XPath evaluator.

        Args:
            selector: The CSS selector string
            axis: XPath axis prefix the selector is evaluated on

        Returns:
            etree.XPath: Compiled expression

        Raises:
            ValueError: If the selector cannot be parsed
        """
        key = (selector, axis)
        compiled = self._selector_cache.get(key)
        if compiled is not None:
            return compiled

        try:
            expression = self.translator.css_to_xpath(selector, prefix=axis)
        except cssselect.SelectorError as e:
            logger.error(f"Error parsing selector '{selector}': {e}")
            raise ValueError(f"Invalid CSS selector '{selector}': {e}") from e

        compiled = etree.XPath(expression, namespaces={'html': XHTML_NAMESPACE})

        if len(self._selector_cache) >= self.MAX_CACHE_SIZE:
            self._selector_cache.clear()
        self._selector_cache[key] = compiled

        return compiled

    def select(self, selector: str, context: etree._Element) -> List[etree._Element]:
        """
        Find all descendants of a node matching a CSS selector.

        Args:
            selector: The CSS selector string
            context: The node to search below

        Returns:
            List of matching elements in document order
        """
        results = self.compile(selector, DESCENDANT_AXIS)(context)
        return [node for node in results if is_element(node)]

    def matching(self, nodes: Iterable[etree._Element], selector: str) -> Set[etree._Element]:
        """
        Get the subset of nodes matching a CSS selector.

        Args:
            nodes: Candidate nodes
            selector: The CSS selector string

        Returns:
            Set of the candidates that match
        """
        nodes = list(nodes)
        if not nodes:
            return set()

        evaluate = self.compile(selector, MEMBERSHIP_AXIS)
        candidates = set(nodes)
        matched: Set[etree._Element] = set()
        searched: List[etree._Element] = []

        for node in nodes:
            root = root_of(node)
            if any(root is done for done in searched):
                continue
            searched.append(root)
            matched.update(result for result in evaluate(root) if result in candidates)

        return matched

    def matches(self, node: etree._Element, selector: str) -> bool:
        """
        Check if a node matches a CSS selector.

        Args:
            node: The node to check
            selector: The CSS selector

        Returns:
            True if the node matches the selector, False otherwise
        """
        return node in self.matching([node], selector)


selector_engine = SelectorEngine()
