#!/usr/bin/env python3
"""Builder for nested <span> annotations."""
from __future__ import annotations

from typing import Iterable, Optional, Union

from bs4 import BeautifulSoup, NavigableString, Tag


class SpanBuilder:
    """
    Fluent construction of span trees:

        SpanBuilder(soup, ["outer"]).title("100 km")
            .span(["num"]).text("62.6").done()
            .text(" ")
            .span(["unit"]).text("miles").done()
            .done()

    ``span()`` descends into a new child and ``done()`` climbs back to the
    parent builder, or returns the finished element from the outermost one.
    """

    def __init__(self, document: BeautifulSoup, classes: Iterable[str], parent: Optional["SpanBuilder"] = None):
        self.document = document
        self.element: Tag = document.new_tag("span", attrs={"class": list(classes)})
        self.parent = parent

    def text(self, value: str) -> "SpanBuilder":
        self.element.append(NavigableString(value))
        return self

    def title(self, value: str) -> "SpanBuilder":
        self.element["title"] = value
        return self

    def span(self, classes: Iterable[str]) -> "SpanBuilder":
        child = SpanBuilder(self.document, classes, parent=self)
        self.element.append(child.element)
        return child

    def done(self) -> Union["SpanBuilder", Tag]:
        return self.parent if self.parent is not None else self.element
