#!/usr/bin/env python3
"""
Container-level toggles that choose which unit family a page shows.

The converter only emits per-quantity classes. Visibility is decided by the
bundled stylesheet from one toggle class on a container (usually <body>):

    no toggle            original units only
    unit-show-all        original units with conversions in parentheses
    unit-show-si         metric always, imperial where the author wrote it
    unit-show-si-only    metric only
    unit-show-imp        imperial always, metric where the author wrote it
    unit-show-imp-only   imperial only
"""
from __future__ import annotations

from enum import Enum
from functools import lru_cache
from importlib import resources
from typing import Optional, Union

from bs4 import Tag

from unitconv.conversion.constants import (
    SHOW_ALL_CLASS_NAME,
    SHOW_IMPERIAL_CLASS_NAME,
    SHOW_IMPERIAL_ONLY_CLASS_NAME,
    SHOW_SI_CLASS_NAME,
    SHOW_SI_ONLY_CLASS_NAME,
)

STYLESHEET_NAME = "units.css"


class DisplayMode(Enum):
    ALL = SHOW_ALL_CLASS_NAME
    SI = SHOW_SI_CLASS_NAME
    SI_ONLY = SHOW_SI_ONLY_CLASS_NAME
    IMPERIAL = SHOW_IMPERIAL_CLASS_NAME
    IMPERIAL_ONLY = SHOW_IMPERIAL_ONLY_CLASS_NAME

    @classmethod
    def parse(cls, value: Union["DisplayMode", str]) -> "DisplayMode":
        """Accept a mode, its class name ("unit-show-si") or its short name ("si-only")."""
        if isinstance(value, cls):
            return value
        name = str(value).strip().lower()
        for mode in cls:
            if name in (mode.value, mode.value[len("unit-show-"):], mode.name.lower()):
                return mode
        choices = ", ".join(mode.value for mode in cls)
        raise ValueError(f"Unknown display mode {value!r}; expected one of {choices}")


def set_display_mode(container: Tag, mode: Optional[Union[DisplayMode, str]]) -> None:
    """Replace any toggle class on ``container`` with ``mode``; ``None`` shows original units only."""
    toggles = {m.value for m in DisplayMode}
    classes = container.get("class") or []
    if isinstance(classes, str):
        classes = classes.split()
    classes = [name for name in classes if name not in toggles]

    if mode is not None:
        classes.append(DisplayMode.parse(mode).value)

    if classes:
        container["class"] = classes
    elif "class" in container.attrs:
        del container["class"]


@lru_cache(maxsize=1)
def load_stylesheet() -> str:
    """The bundled stylesheet mapping toggle classes to visibility."""
    return resources.files("unitconv.conversion").joinpath("resources").joinpath(STYLESHEET_NAME).read_text(encoding="utf-8")
