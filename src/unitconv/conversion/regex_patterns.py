#!/usr/bin/env python3
"""
Regular expressions for recognizing quantities in flattened page text.

A quantity is a number, optionally a range end, an optional "deg"/"degree"
stop word and a unit token from the unit table:

    4 1/2 miles      20-25 km      5 to 10 kg      -40 degrees F      7/8 mile
"""
from __future__ import annotations

import re
from functools import lru_cache
from typing import Mapping, Pattern

from .unit_table import UNITS, UnitDefinition, unit_tokens

# A non-negative integer numerator and counting-number denominator, or a
# dedicated fraction code point.
FRACTION_PATTERN = (
    r"(?:\d+\s*[/∕]\s*0*[1-9]\d*"
    r"|[¼-¾⅓-⅞])"
)

# Recognizes a number parseable by numeric.str_to_num.
NUMBER_PATTERN = (
    r"[+-]?"  # Sign
    r"(?:"
    r"(?:"
    r"\d+(?:,\d+)*"  # Integer with myriad separators. No comma decimal points.
    r"(?:"
    r"\.\d+"  # Decimal fraction: "4.5"
    r"|\s+" + FRACTION_PATTERN +  # Or a vulgar fraction: "4 1/2"
    r")?"
    r")"
    r"|\.\d+"  # A value < 1 without an integer part: ".25"
    r"|" + FRACTION_PATTERN +  # A stand-alone fraction: "7/8"
    r")"
)

# A quantity never starts inside a longer number: "1.000,5 kg" is not "5 kg",
# but "5 km,10 km" is two quantities.
NUMBER_START_PATTERN = r"(?<!\d)(?<!\d[.,])"

RANGE_SEPARATOR_PATTERN = r"(?:-|\bto\b|\band\b)"

# "deg" and "degree" are often written before temperature units.
DEGREE_STOP_WORD_PATTERN = r"(?:\s+deg(?:ree)?s?\b)?"


def build_quantity_pattern(tokens: list[str]) -> str:
    """
    Build the quantity grammar for the given unit tokens.

    Groups: ``left`` number, optional ``right`` range end, ``unit`` token.
    ``tokens`` must be ordered longest first so alternation prefers the
    longest unit name.
    """
    units = "|".join(re.escape(token) for token in tokens)
    return (
        NUMBER_START_PATTERN +
        r"(?P<left>" + NUMBER_PATTERN + r")"
        r"(?:\s*" + RANGE_SEPARATOR_PATTERN + r"\s*(?P<right>" + NUMBER_PATTERN + r"))?"
        + DEGREE_STOP_WORD_PATTERN +
        r"\s*(?P<unit>" + units + r")s?(?!\w)"
    )


@lru_cache(maxsize=8)
def _compile_for_tokens(tokens: tuple[str, ...]) -> Pattern[str]:
    return re.compile(build_quantity_pattern(list(tokens)), re.IGNORECASE)


def get_quantity_pattern(table: Mapping[str, UnitDefinition] = UNITS) -> Pattern[str]:
    """The compiled, cached quantity pattern for a unit table."""
    return _compile_for_tokens(tuple(unit_tokens(table)))
