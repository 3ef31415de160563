#!/usr/bin/env python3
"""Shared constants for the conversion modules."""
from __future__ import annotations

# ==============================================================================
# ANNOTATION MARKERS
# ==============================================================================

# Attached to quantities processed by a pass to prevent re-processing.
PROCESSED_CLASS_NAME = "unit-processed"
# Attached to quantities specified in Imperial/English units: lbs, ft.
IMPERIAL_CLASS_NAME = "unit-imp"
# Attached to quantities specified in SI units: kg, m.
SI_CLASS_NAME = "unit-si"
# Attached to quantities specified by the page author.
PRIMARY_CLASS_NAME = "unit-primary"
# Attached to quantities added by the converter.
AUXILIARY_CLASS_NAME = "unit-auxiliary"
# Attached by the page author to elements that contain temperature changes.
DELTA_CLASS_NAME = "unit-delta"

# http://microformats.org/wiki/measure
MEASURE_CLASS_NAME = "hmeasure"
NUM_CLASS_NAME = "num"
UNIT_CLASS_NAME = "unit"

# Container-level toggles interpreted by the stylesheet.
SHOW_SI_CLASS_NAME = "unit-show-si"
SHOW_SI_ONLY_CLASS_NAME = "unit-show-si-only"
SHOW_IMPERIAL_CLASS_NAME = "unit-show-imp"
SHOW_IMPERIAL_ONLY_CLASS_NAME = "unit-show-imp-only"
SHOW_ALL_CLASS_NAME = "unit-show-all"

# ==============================================================================
# NUMERIC LITERALS
# ==============================================================================

DEFAULT_SIGNIFICANT_DIGITS = 3

# Elements whose text is not part of the readable page content.
DEFAULT_SKIP_TAGS = ("script", "style", "textarea", "template")

CODE_POINT_TO_FRACTION: dict[str, float] = {
    "¼": 1 / 4,
    "½": 1 / 2,
    "¾": 3 / 4,
    "⅓": 1 / 3,
    "⅔": 2 / 3,
    "⅕": 1 / 5,
    "⅖": 2 / 5,
    "⅗": 3 / 5,
    "⅘": 4 / 5,
    "⅙": 1 / 6,
    "⅚": 5 / 6,
    "⅛": 1 / 8,
    "⅜": 3 / 8,
    "⅝": 5 / 8,
    "⅞": 7 / 8,
}
