#!/usr/bin/env python3
"""
Entry points of the conversion pass.

    soup = BeautifulSoup("<p>I walked 100 km yesterday.</p>", "html.parser")
    convert(soup)
    # <p>I walked <span ...>100 km</span><span ...>62.6 miles</span> yesterday.</p>

The pass flattens the subtree, detects quantities in the flattened text and
splices the conversions back in, last match first. It is idempotent: text
already inside ``unit-processed`` output is never converted again.
"""
from __future__ import annotations

import uuid
from typing import Optional

from bs4 import BeautifulSoup, Tag

from unitconv.conversion.detectors.quantity_detector import QuantityDetector
from unitconv.conversion.display import set_display_mode
from unitconv.conversion.flattener import flatten
from unitconv.conversion.splicer import UnitSplicer
from unitconv.conversion.unit_table import UNITS
from unitconv.core.config import ConfigLoader, get_config, setup_logging
from unitconv.core.logging import LogContext

logger = setup_logging(__name__)


def _resolve_root(root: Optional[Tag], document: Optional[BeautifulSoup]) -> Tag:
    if root is None:
        if document is None:
            raise ValueError("convert() needs a root element or a document")
        root = document
    if isinstance(root, BeautifulSoup):
        return root.body or root
    return root


def convert(
    root: Optional[Tag] = None,
    *,
    document: Optional[BeautifulSoup] = None,
    config: Optional[ConfigLoader] = None,
) -> None:
    """
    Annotate every quantity under ``root`` with its converted counterpart.

    Args:
        root: Element to convert. A whole BeautifulSoup document means its
            <body>, or the document itself when it has none.
        document: Document whose body is converted when ``root`` is omitted.
        config: Configuration; the global config when omitted.

    Raises:
        ValueError: If neither ``root`` nor ``document`` is given.
        SplicerInvariantError: If the offset bookkeeping is inconsistent.
    """
    root = _resolve_root(root, document)
    config = config or get_config()

    with LogContext(pass_id=uuid.uuid4().hex[:8], root=root.name):
        flattened = flatten(root, config.skip_tags)
        matches = QuantityDetector(UNITS).detect(flattened.text)

        splicer = UnitSplicer(
            flattened,
            UNITS,
            precision=config.significant_digits,
            range_separator=config.range_separator,
        )
        splicer.apply(matches)
        logger.debug(f"Converted {splicer.converted} quantities, skipped {splicer.skipped} already converted")


def convert_html(
    markup: str,
    *,
    parser: Optional[str] = None,
    display_mode: Optional[str] = None,
    config: Optional[ConfigLoader] = None,
) -> str:
    """
    Parse ``markup``, convert its quantities and serialize it again.

    ``display_mode`` (or the configured ``html.display_mode``) is set on the
    body; a fragment without one is wrapped in a <div> that carries it.
    """
    config = config or get_config()
    soup = BeautifulSoup(markup, parser or config.html_parser)
    convert(soup, config=config)

    mode = display_mode or config.display_mode
    if mode:
        set_display_mode(_toggle_container(soup), mode)
    return str(soup)


def _toggle_container(soup: BeautifulSoup) -> Tag:
    """The element carrying the display toggle: <body>, or a <div> around a fragment."""
    if soup.body is not None:
        return soup.body
    container = soup.new_tag("div")
    for child in list(soup.contents):
        container.append(child.extract())
    soup.append(container)
    return container
