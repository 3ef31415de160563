"""
GOOBITS UNITCONV - metric/imperial annotations for quantities in HTML pages.

    from bs4 import BeautifulSoup
    from unitconv import convert

    soup = BeautifulSoup("<p>I walked 100 km yesterday.</p>", "html.parser")
    convert(soup)

Each recognized quantity is wrapped in a ``unit-primary`` span and followed by
a ``unit-auxiliary`` span holding the value in the other unit system. Load
``units.css`` (see ``load_stylesheet``) and put one of the ``unit-show-*``
classes on <body> to choose what readers see.
"""

__version__ = "1.0.0"
__author__ = "GOOBITS Team"

from unitconv.conversion import (
    DisplayMode,
    SplicerInvariantError,
    convert,
    convert_html,
    load_stylesheet,
    set_display_mode,
)

__all__ = [
    "DisplayMode",
    "SplicerInvariantError",
    "convert",
    "convert_html",
    "load_stylesheet",
    "set_display_mode",
]
