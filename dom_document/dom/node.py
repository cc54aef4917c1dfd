"""
Node helpers for the DOM.
This module implements insertion, removal and cloning over lxml nodes.

lxml keeps text in the .text and .tail of elements instead of in text nodes,
and moving an element moves its tail along with it. The helpers here keep
every piece of text in the document position a W3C DOM would leave it in.
"""

import copy
from typing import List, Optional, Sequence, Union

from lxml import etree


def is_element(node) -> bool:
    """
    Check whether a node is a real element.

    Args:
        node: Any object

    Returns:
        bool: True for lxml elements, False for comments, PIs and anything else
    """
    return isinstance(node, etree._Element) and isinstance(node.tag, str)


def local_name(node: etree._Element) -> str:
    """
    Get the lower cased tag name of an element without its namespace.

    Args:
        node: The element

    Returns:
        str: The local name, or an empty string for comments and PIs
    """
    if not is_element(node):
        return ''
    return etree.QName(node).localname.lower()


def root_of(node: etree._Element) -> etree._Element:
    """Return the topmost ancestor of a node (the node itself if detached)."""
    parent = node.getparent()
    while parent is not None:
        node = parent
        parent = node.getparent()
    return node


def text_content(node: etree._Element) -> str:
    """
    Get the text content of a node.

    Args:
        node: The node

    Returns:
        str: All descendant text concatenated in document order
    """
    return str(node.xpath('string()'))


def clone_node(node: etree._Element) -> etree._Element:
    """
    Deep copy a node.

    Args:
        node: The node to copy

    Returns:
        etree._Element: A detached copy without the original's tail text
    """
    clone = copy.deepcopy(node)
    clone.tail = None
    return clone


def detach(node: etree._Element) -> etree._Element:
    """
    Remove a node from its parent.

    The node's tail text stays in the tree, joined to the preceding text.

    Args:
        node: The node to remove

    Returns:
        etree._Element: The detached node, without tail text
    """
    parent = node.getparent()
    if parent is None:
        node.tail = None
        return node

    tail = node.tail
    if tail:
        previous = node.getprevious()
        if previous is not None:
            previous.tail = (previous.tail or '') + tail
        else:
            parent.text = (parent.text or '') + tail

    node.tail = None
    parent.remove(node)
    return node


def insert_before(reference: etree._Element, node: etree._Element) -> None:
    """
    Insert a node directly before another one.

    Args:
        reference: The node that should follow the inserted node
        node: The node to insert (detached first if it is in a tree)

    Raises:
        ValueError: If the reference has no parent
    """
    _check_parent(reference)
    detach(node)
    reference.addprevious(node)


def insert_after(reference: etree._Element, node: etree._Element) -> None:
    """
    Insert a node directly after another one.

    The text that followed the reference ends up following the inserted node.

    Args:
        reference: The node that should precede the inserted node
        node: The node to insert (detached first if it is in a tree)

    Raises:
        ValueError: If the reference has no parent
    """
    _check_parent(reference)
    detach(node)
    tail = reference.tail
    reference.tail = None
    reference.addnext(node)
    node.tail = tail


def _check_parent(reference: etree._Element) -> None:
    if reference.getparent() is None:
        raise ValueError("Cannot insert next to a node without a parent")


def insert_all_after(reference: etree._Element, nodes: Sequence[etree._Element]) -> None:
    """Insert several nodes after a reference, keeping their order."""
    anchor = reference
    for node in nodes:
        insert_after(anchor, node)
        anchor = node


def append_node(parent: etree._Element, node: etree._Element) -> None:
    """
    Append a node as the last child of a parent.

    Args:
        parent: The new parent
        node: The node to append (detached first if it is in a tree)
    """
    detach(node)
    parent.append(node)


def append_fragment(parent: etree._Element, fragment: Sequence[Union[str, etree._Element]],
                    copy_nodes: bool = False) -> None:
    """
    Append parsed content, text and elements mixed, to a parent.

    Elements bring their tail text along.

    Args:
        parent: The new parent
        fragment: Strings and elements in document order
        copy_nodes: Append copies and leave the fragment untouched
    """
    for item in fragment:
        if isinstance(item, str):
            append_text(parent, item)
        elif copy_nodes:
            parent.append(copy.deepcopy(item))
        else:
            parent.append(item)


def prepend_nodes(parent: etree._Element, nodes: Sequence[etree._Element]) -> None:
    """
    Insert nodes before the first child (and leading text) of a parent.

    Args:
        parent: The new parent
        nodes: Nodes to insert, in order
    """
    if not nodes:
        return

    for node in nodes:
        detach(node)

    text = parent.text
    parent.text = None
    for index, node in enumerate(nodes):
        parent.insert(index, node)

    if text:
        last = nodes[-1]
        last.tail = (last.tail or '') + text


def append_text(parent: etree._Element, text: str) -> None:
    """Add text after the last child of a parent."""
    if len(parent):
        last = parent[-1]
        last.tail = (last.tail or '') + text
    else:
        parent.text = (parent.text or '') + text


def prepend_text(parent: etree._Element, text: str) -> None:
    """Add text before the first child of a parent."""
    parent.text = text + (parent.text or '')


def insert_text_before(reference: etree._Element, text: str) -> None:
    """
    Add text directly before a node.

    Args:
        reference: The node the text should precede
        text: The text to insert

    Raises:
        ValueError: If the node has no parent
    """
    previous = reference.getprevious()
    if previous is not None:
        previous.tail = (previous.tail or '') + text
        return

    parent = reference.getparent()
    if parent is None:
        raise ValueError("Cannot insert text next to a node without a parent")
    parent.text = (parent.text or '') + text


def insert_text_after(reference: etree._Element, text: str) -> None:
    """
    Add text directly after a node.

    Args:
        reference: The node the text should follow
        text: The text to insert

    Raises:
        ValueError: If the node has no parent
    """
    if reference.getparent() is None:
        raise ValueError("Cannot insert text next to a node without a parent")
    reference.tail = text + (reference.tail or '')


def clear_children(parent: etree._Element) -> None:
    """Remove all children and text of a node."""
    parent.text = None
    for child in list(parent):
        parent.remove(child)


def replace_node(old: etree._Element, nodes: Sequence[etree._Element]) -> None:
    """
    Replace a node with a sequence of nodes.

    Args:
        old: The node to replace
        nodes: Replacement nodes, in order (may be empty)
    """
    for node in nodes:
        insert_before(old, node)
    detach(old)


def element_children(node: etree._Element, name: Optional[str] = None) -> List[etree._Element]:
    """
    Get the element children of a node.

    Args:
        node: The parent node
        name: Only return children with this local name

    Returns:
        List[etree._Element]: Children in document order
    """
    return [child for child in node
            if is_element(child) and (name is None or local_name(child) == name)]
