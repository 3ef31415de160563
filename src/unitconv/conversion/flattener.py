#!/usr/bin/env python3
"""
Flattening of an HTML subtree into one logical string.

The quantity grammar runs over the concatenated text of all readable text
leaves, so "4 <b>1/2</b> miles" is still one quantity. ``FlattenedText``
keeps, for every leaf, the offset where its content starts, which is what the
splicer needs to map a match back onto the (possibly fragmented) leaves.
"""
from __future__ import annotations

import re
from bisect import bisect_right
from dataclasses import dataclass, field
from typing import Iterable

from bs4 import NavigableString, Tag
from bs4.element import PageElement, PreformattedString

from unitconv.conversion.constants import DEFAULT_SKIP_TAGS
from unitconv.core.config import setup_logging

logger = setup_logging(__name__)


@dataclass
class FlattenedText:
    """
    Concatenated text of a subtree plus its leaf-offset table.

    ``leaves[i]`` holds ``text[offsets[i]:offsets[i + 1]]``; ``offsets`` has
    one more entry than ``leaves``, the total length, and is strictly
    increasing because empty leaves are never recorded.
    """

    text: str = ""
    leaves: list[NavigableString] = field(default_factory=list)
    offsets: list[int] = field(default_factory=lambda: [0])

    def leaf_index_for(self, position: int) -> int:
        """Index of the leaf containing the character at ``position``."""
        if not 0 <= position < len(self.text):
            raise IndexError(f"Position {position} outside flattened text of length {len(self.text)}")
        return bisect_right(self.offsets, position) - 1

    def __len__(self) -> int:
        return len(self.leaves)


class TextFlattener:
    """Depth-first visitor over elements and text leaves."""

    def __init__(self, skip_tags: Iterable[str] = DEFAULT_SKIP_TAGS):
        names = "|".join(re.escape(name) for name in skip_tags)
        # Matches namespaced names too: "svg:style".
        self._skip = re.compile(r"(?:^|:)(?:%s)$" % names, re.IGNORECASE) if names else None

    def flatten(self, root: PageElement) -> FlattenedText:
        chunks: list[str] = []
        result = FlattenedText()
        self._visit(root, chunks, result)
        result.text = "".join(chunks)
        logger.debug(f"Flattened {len(result.leaves)} text leaves into {len(result.text)} characters")
        return result

    def is_skipped(self, element: Tag) -> bool:
        return bool(self._skip and element.name and self._skip.search(element.name))

    def _visit(self, node: PageElement, chunks: list[str], result: FlattenedText) -> None:
        if isinstance(node, Tag):
            self._visit_element(node, chunks, result)
        elif isinstance(node, NavigableString):
            self._visit_text(node, chunks, result)

    def _visit_element(self, element: Tag, chunks: list[str], result: FlattenedText) -> None:
        # Script and style content is not part of the page's text.
        if self.is_skipped(element):
            return
        for child in element.contents:
            self._visit(child, chunks, result)

    def _visit_text(self, leaf: NavigableString, chunks: list[str], result: FlattenedText) -> None:
        # Comments, CDATA, doctypes and processing instructions.
        if isinstance(leaf, PreformattedString):
            return
        text = str(leaf)
        if not text:
            return
        chunks.append(text)
        result.leaves.append(leaf)
        result.offsets.append(result.offsets[-1] + len(text))


def flatten(root: PageElement, skip_tags: Iterable[str] = DEFAULT_SKIP_TAGS) -> FlattenedText:
    """Flatten ``root`` into its text and leaf-offset table."""
    return TextFlattener(skip_tags).flatten(root)
