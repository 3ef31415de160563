#!/usr/bin/env python3
"""
Splicing of converted quantities back into the document.

Matches are applied from the highest offset to the lowest. Every edit only
touches text at or after the current match's start, so the leaf-offset table
taken before the first edit stays valid for all matches still to come; the
one leaf whose prefix survives an edit is re-pointed at that prefix.

For a match "100 km" inside ``<p>I walked 100 km yesterday.</p>`` the result
is::

    <p>I walked <span class="unit-processed unit-primary unit-si">100 km</span><span
    class="unit-processed unit-auxiliary unit-imp hmeasure" title="100 km"><span
    class="num">62.6</span> <span class="unit">miles</span></span> yesterday.</p>
"""
from __future__ import annotations

from itertools import chain
from typing import Mapping, Optional, Sequence

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PageElement

from unitconv.conversion.common import QuantityMatch, UnitSystem
from unitconv.conversion.constants import (
    AUXILIARY_CLASS_NAME,
    DEFAULT_SIGNIFICANT_DIGITS,
    DELTA_CLASS_NAME,
    MEASURE_CLASS_NAME,
    NUM_CLASS_NAME,
    PRIMARY_CLASS_NAME,
    PROCESSED_CLASS_NAME,
    UNIT_CLASS_NAME,
)
from unitconv.conversion.flattener import FlattenedText
from unitconv.conversion.numeric import significant_digits
from unitconv.conversion.span_builder import SpanBuilder
from unitconv.conversion.unit_table import UNITS, UnitDefinition, lookup_unit, validate_unit_table
from unitconv.core.config import setup_logging

logger = setup_logging(__name__)


class SplicerInvariantError(AssertionError):
    """The leaf cursor and the offset table disagree with the matches."""


def element_classes(element: Tag) -> list[str]:
    classes = element.get("class") or []
    if isinstance(classes, str):
        classes = classes.split()
    return list(classes)


def has_class_ancestor(node: PageElement, class_name: str) -> bool:
    """True iff ``node`` or one of its ancestors is an element with ``class_name``."""
    for ancestor in chain((node,), node.parents):
        if isinstance(ancestor, Tag) and class_name in element_classes(ancestor):
            return True
    return False


def owner_document(node: PageElement) -> BeautifulSoup:
    for ancestor in chain((node,), node.parents):
        if isinstance(ancestor, BeautifulSoup):
            return ancestor
    raise ValueError(f"{node!r} is not attached to a BeautifulSoup document")


def split_text(leaf: NavigableString, start: int, end: int) -> tuple[NavigableString, Optional[NavigableString]]:
    """
    Isolate ``leaf[start:end]`` as its own text node without changing the
    document's text.

    Returns the isolated node (``leaf`` itself when the range covers all of
    it) and the node now holding the text before ``start``, if any.
    """
    text = str(leaf)
    if start == 0 and end == len(text):
        return leaf, None

    string_class = type(leaf)
    prefix = string_class(text[:start]) if start else None
    isolated = string_class(text[start:end])
    suffix = string_class(text[end:]) if end < len(text) else None
    leaf.replace_with(*[piece for piece in (prefix, isolated, suffix) if piece is not None])
    return isolated, prefix


def convert_value(definition: UnitDefinition, value: float, delta: bool = False) -> float:
    """
    Convert ``value`` into the counterpart system.

    A temperature change is converted without the zero-point offset:
    a rise of 5 °C is a rise of 9 °F, not of 41 °F.
    """
    offset = 0 if delta else definition.offset
    return (value + offset) * definition.ratio


class UnitSplicer:
    """Wraps matched quantities and inserts their converted counterparts."""

    def __init__(
        self,
        flattened: FlattenedText,
        unit_table: Mapping[str, UnitDefinition] = UNITS,
        precision: int = DEFAULT_SIGNIFICANT_DIGITS,
        range_separator: str = "-",
    ):
        if unit_table is not UNITS:
            validate_unit_table(unit_table)
        self.flattened = flattened
        self.unit_table = unit_table
        self.precision = precision
        self.range_separator = range_separator
        self.converted = 0
        self.skipped = 0

    def apply(self, matches: Sequence[QuantityMatch]) -> None:
        """Splice ``matches`` (ordered by start) into the document, last first."""
        offsets = self.flattened.offsets
        leaves = self.flattened.leaves

        # Index of the leaf being processed; only ever moves towards 0.
        cursor = len(leaves) - 1

        for match in reversed(matches):
            while cursor >= 0 and offsets[cursor] >= match.end:
                cursor -= 1
            if cursor < 0:
                raise SplicerInvariantError(f"No text leaf ends quantity {match.text!r} at {match.end}")

            last_leaf = leaves[cursor]
            if has_class_ancestor(last_leaf, PROCESSED_CLASS_NAME):
                logger.debug(f"Skipping already converted quantity '{match.text}' at {match.start}")
                self.skipped += 1
                continue

            try:
                start_cursor = self.flattened.leaf_index_for(match.start)
            except IndexError as e:
                raise SplicerInvariantError(f"Quantity {match.text!r} starts outside the flattened text") from e
            if not 0 <= start_cursor <= cursor:
                raise SplicerInvariantError(f"No text leaf starts quantity {match.text!r} at {match.start}")

            definition = lookup_unit(match.unit_token, self.unit_table)
            delta = bool(definition.offset) and has_class_ancestor(last_leaf, DELTA_CLASS_NAME)

            primary = self._wrap_primary(match, start_cursor, cursor, UnitSystem.of(definition.is_metric))
            auxiliary = self._build_auxiliary(match, definition, delta, owner_document(primary))
            primary.insert_after(auxiliary)
            self.converted += 1

            cursor = start_cursor

    def _wrap_primary(self, match: QuantityMatch, first: int, last: int, system: UnitSystem) -> Tag:
        """Wrap the matched text of leaves ``first..last`` in primary spans; return the last span."""
        offsets = self.flattened.offsets
        leaves = self.flattened.leaves
        classes = [PROCESSED_CLASS_NAME, PRIMARY_CLASS_NAME, system.value]

        span: Optional[Tag] = None
        for index in range(first, last + 1):
            leaf = leaves[index]
            isolated, prefix = split_text(
                leaf,
                max(0, match.start - offsets[index]),
                min(match.end, offsets[index + 1]) - offsets[index],
            )
            leaves[index] = prefix if prefix is not None else isolated

            span = SpanBuilder(owner_document(isolated), classes).done()
            isolated.wrap(span)

        if span is None:
            raise SplicerInvariantError(f"No text leaves to wrap for quantity {match.text!r}")
        return span

    def _build_auxiliary(
        self, match: QuantityMatch, definition: UnitDefinition, delta: bool, document: BeautifulSoup
    ) -> Tag:
        """Build the microformat span holding the converted quantity."""
        left = significant_digits(convert_value(definition, match.left_value, delta), self.precision)
        plural = match.is_range or left != "1"

        system = UnitSystem.of(definition.is_metric).opposite
        builder = (
            SpanBuilder(document, [PROCESSED_CLASS_NAME, AUXILIARY_CLASS_NAME, system.value, MEASURE_CLASS_NAME])
            .title(match.text)
            .span([NUM_CLASS_NAME])
            .text(left)
            .done()
        )
        if match.is_range:
            right = significant_digits(convert_value(definition, match.right_value, delta), self.precision)
            builder = builder.text(self.range_separator).span([NUM_CLASS_NAME]).text(right).done()

        return builder.text(" ").span([UNIT_CLASS_NAME]).text(definition.display_name(plural)).done().done()
