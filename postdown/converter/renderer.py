"""Markdown rendering of the typed document tree."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Union

from postdown.converter.models import (
    BoldMark,
    CodeMark,
    Document,
    Embed,
    Figure,
    Heading,
    HorizontalRule,
    Image,
    ItalicMark,
    LinkMark,
    ListItem,
    Node,
    OrderedList,
    Paragraph,
    StrikethroughMark,
    Text,
    UnorderedList,
)

logger = logging.getLogger(__name__)

BLOCK_SEPARATOR = "\n\n"

# A pending piece of output: either finished text or a node still to expand.
_Fragment = Union[str, Node]


class MarkdownRenderer:
    """Renders a document tree to Markdown.

    Rendering walks an explicit work-list rather than recursing, so deep
    trees are bounded by memory, not the interpreter stack. The renderer
    holds only its options and is safe to share between threads.
    """

    def __init__(self, skip_types: Iterable[str] = (), bullet_marker: str = "*") -> None:
        self._skip_types = frozenset(skip_types)
        self._bullet_marker = bullet_marker

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def render(self, document: Document) -> str:
        return self.render_content(document.content)

    def render_content(self, nodes: Sequence[Node]) -> str:
        """Render a sequence of nodes in order and concatenate the results."""
        return self._drain(nodes)

    def render_text(self, node: Text) -> str:
        """Render a text node, wrapping it once per mark in input order."""
        if not isinstance(node, Text):
            return ""
        text = node.text
        for mark in node.marks:
            match mark:
                case LinkMark(href=str() as href):
                    text = f"[{text}]({href})"
                case BoldMark():
                    text = f"**{text}**"
                case ItalicMark():
                    text = f"_{text}_"
                case CodeMark():
                    text = f"`{text}`"
                case StrikethroughMark():
                    text = f"~~{text}~~"
                case _:
                    pass
        return text

    def render_image(self, node: Image) -> str:
        if not isinstance(node, Image) or node.src is None:
            return ""
        return f"![{node.text}]({node.src})"

    def render_ordered_list(self, node: OrderedList) -> str:
        if not isinstance(node, OrderedList):
            return ""
        return self._drain(self._ordered_items(node))

    def render_unordered_list(self, node: UnorderedList) -> str:
        if not isinstance(node, UnorderedList):
            return ""
        return self._drain(self._unordered_items(node))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _drain(self, fragments: Sequence[_Fragment]) -> str:
        parts: list[str] = []
        stack: list[_Fragment] = list(reversed(fragments))
        while stack:
            item = stack.pop()
            if isinstance(item, str):
                parts.append(item)
            else:
                stack.extend(reversed(self._expand(item)))
        return "".join(parts)

    def _expand(self, node: Node) -> list[_Fragment]:
        """Return the output fragments for a single node, children unexpanded."""
        if node.type in self._skip_types:
            logger.debug("Skipping configured node type %r", node.type)
            return []

        match node:
            case Text():
                return [self.render_text(node)]
            case Heading():
                return ["#" * node.level + " ", *node.content, BLOCK_SEPARATOR]
            case Paragraph():
                return [*node.content, BLOCK_SEPARATOR]
            case Image():
                return [self.render_image(node), BLOCK_SEPARATOR]
            case Figure():
                return list(node.content)
            case HorizontalRule():
                return ["---", BLOCK_SEPARATOR]
            case OrderedList():
                return self._ordered_items(node)
            case UnorderedList():
                return self._unordered_items(node)
            case Embed():
                logger.debug("Skipping embed node %r", node.type)
                return []
            case ListItem():
                logger.debug("Skipping list item outside of a list")
                return []
            case _:
                logger.debug("Skipping unsupported node type %r", node.type)
                return []

    def _ordered_items(self, node: OrderedList) -> list[_Fragment]:
        fragments: list[_Fragment] = []
        items = [child for child in node.content if isinstance(child, ListItem)]
        for number, item in enumerate(items, start=node.start):
            fragments.append(f"{number}. ")
            fragments.extend(item.content)
        return fragments

    def _unordered_items(self, node: UnorderedList) -> list[_Fragment]:
        fragments: list[_Fragment] = []
        for item in node.content:
            if isinstance(item, ListItem):
                fragments.append(f"{self._bullet_marker} ")
                fragments.extend(item.content)
        return fragments
