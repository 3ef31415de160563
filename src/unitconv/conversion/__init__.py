"""
Quantity conversion over HTML trees.

Flattener -> QuantityDetector -> UnitSplicer, driven by ``convert``.
"""

from .converter import convert, convert_html
from .display import DisplayMode, load_stylesheet, set_display_mode
from .splicer import SplicerInvariantError
from .unit_table import UNITS, UnitDefinition, UnitKind, lookup_unit

__all__ = [
    "UNITS",
    "DisplayMode",
    "SplicerInvariantError",
    "UnitDefinition",
    "UnitKind",
    "convert",
    "convert_html",
    "load_stylesheet",
    "lookup_unit",
    "set_display_mode",
]
