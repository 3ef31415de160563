#!/usr/bin/env python3
"""Detection of number + unit quantities in flattened page text."""
from __future__ import annotations

from typing import Iterator, Mapping

from unitconv.conversion.common import QuantityMatch
from unitconv.conversion.numeric import str_to_num
from unitconv.conversion.regex_patterns import get_quantity_pattern
from unitconv.conversion.unit_table import UNITS, UnitDefinition
from unitconv.core.config import setup_logging

logger = setup_logging(__name__)


class QuantityDetector:
    """Finds quantities such as "100 km", "4 1/2 lbs" or "20-25 °C" in text."""

    def __init__(self, unit_table: Mapping[str, UnitDefinition] = UNITS):
        self.unit_table = unit_table
        self.pattern = get_quantity_pattern(unit_table)

    def iter_matches(self, text: str) -> Iterator[QuantityMatch]:
        """
        Yield quantities in ``text`` from left to right.

        A single left-to-right scan with the longest unit tokens tried first
        never yields overlapping matches.
        """
        for match in self.pattern.finditer(text):
            right = match.group("right")
            yield QuantityMatch(
                start=match.start(),
                end=match.end(),
                text=match.group(0),
                left_value=str_to_num(match.group("left")),
                right_value=str_to_num(right) if right else None,
                unit_token=match.group("unit"),
            )

    def detect(self, text: str) -> list[QuantityMatch]:
        """All quantities in ``text``, ordered by start offset."""
        matches = list(self.iter_matches(text))
        logger.debug(f"Detected {len(matches)} quantities in {len(text)} characters")
        return matches
