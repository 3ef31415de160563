#!/usr/bin/env python3
"""Parsing of matched numeric literals and significant-digit formatting."""
from __future__ import annotations

import math
import re
from decimal import Decimal

from .constants import CODE_POINT_TO_FRACTION, DEFAULT_SIGNIFICANT_DIGITS

_SIGN_AND_SEPARATORS = re.compile(r"[,+\-]")
_TRAILING_FRACTION = re.compile(r"(?:(\d+)\s*[/∕]\s*(\d+)|([¼-¾⅓-⅞]))$")
_WHITESPACE_RUN = re.compile(r"\s+")

_EXPONENT_SUFFIX = re.compile(r"[eE][+-]?\d+$")
_TRAILING_FRACTION_ZEROS = re.compile(r"\.(\d*[1-9])?0+$")
_TRAILING_POINT = re.compile(r"\.$")


def str_to_num(text: str) -> float:
    """
    The number written as ``text``.

    Assumes '.' is a decimal point, ',' separates myriads and '/' or U+2215
    separate the numerator and denominator of a fraction:
    "1,000.5" -> 1000.5, "4 1/2" -> 4.5, "-¾" -> -0.75, ".25" -> 0.25.
    """
    sign = -1 if text[:1] == "-" else 1
    text = _SIGN_AND_SEPARATORS.sub("", text)

    fraction = 0.0
    match = _TRAILING_FRACTION.search(text)
    if match:
        text = _WHITESPACE_RUN.sub("", text[: match.start()], count=1)
        if match.group(3):
            fraction = CODE_POINT_TO_FRACTION[match.group(3)]
        else:
            fraction = int(match.group(1)) / int(match.group(2))

    text = text.strip()
    whole = float(text) if text else 0.0
    return sign * (whole + fraction)


def number_to_string(num: float) -> str:
    """
    Shortest round-tripping decimal for ``num``, in plain notation unless
    |num| >= 1e21 or |num| < 1e-6 (the thresholds web pages use).
    """
    if math.isnan(num):
        return "NaN"
    if math.isinf(num):
        return "Infinity" if num > 0 else "-Infinity"
    if num == int(num) and abs(num) < 1e21:
        return str(int(num))

    text = repr(float(num))
    mantissa, _, exponent = text.partition("e")
    if not exponent:
        return text
    power = int(exponent)
    if -7 < power < 21:
        return format(Decimal(text), "f")
    return f"{mantissa}e{power:+d}"


def significant_digits(num: float, n_digits: int = DEFAULT_SIGNIFICANT_DIGITS) -> str:
    """
    Render ``num`` keeping its first ``n_digits`` significant digits.

    Later digits are zeroed rather than rounded, then trailing fractional
    zeros and a bare decimal point are dropped: 62.6, 100, 0.454, 7.24.
    An exponent suffix is kept verbatim.
    """
    if math.isfinite(num):
        # Clear binary noise such as 211.99999999999997 before truncating.
        num = float(format(num, ".15g"))

    text = number_to_string(num)
    exponent_match = _EXPONENT_SUFFIX.search(text)
    exponent = exponent_match.group(0) if exponent_match else ""
    mantissa = text[: len(text) - len(exponent)]

    pattern = re.compile(r"^(-?0*\.?0*)((?:\d\.?){1,%d})((?:\d\.?)*)" % n_digits)
    mantissa = pattern.sub(
        lambda m: m.group(1) + m.group(2) + re.sub(r"\d", "0", m.group(3)),
        mantissa,
        count=1,
    )
    mantissa = _TRAILING_FRACTION_ZEROS.sub(lambda m: "." + (m.group(1) or ""), mantissa)
    mantissa = _TRAILING_POINT.sub("", mantissa)
    return mantissa + exponent
