#!/usr/bin/env python3
"""
App hooks for the unitconv CLI - implementation of every command.
Each hook returns the process exit code.
"""

import json as jsonlib
import sys
from pathlib import Path
from typing import Optional, Sequence

from rich.console import Console
from rich.table import Table

console = Console()


def _load_config(config: Optional[str]):
    from unitconv.core.config import ConfigLoader, get_config

    return ConfigLoader(config) if config else get_config()


def _read_input(name: str) -> str:
    if name == "-":
        return sys.stdin.read()
    return Path(name).read_text(encoding="utf-8")


def _write_output(text: str, output: Optional[str]) -> None:
    if output:
        Path(output).write_text(text, encoding="utf-8")
    else:
        sys.stdout.write(text)


def on_convert(
    files: Sequence[str],
    output: Optional[str],
    display: Optional[str],
    parser: Optional[str],
    debug: bool,
    config: Optional[str],
    **kwargs,
) -> int:
    """Handle the convert command - annotate quantities in HTML files"""
    try:
        from unitconv.conversion.converter import convert_html
        from unitconv.core.logging import set_level

        loaded_config = _load_config(config)
        set_level("DEBUG" if debug else loaded_config.log_level)

        # Several inputs with an output path write one file per input into that directory
        if output and len(files) > 1:
            out_dir = Path(output)
            out_dir.mkdir(parents=True, exist_ok=True)
            for name in files:
                if name == "-":
                    raise ValueError("stdin cannot be combined with other inputs when writing to a directory")
                converted = convert_html(
                    _read_input(name), parser=parser, display_mode=display, config=loaded_config
                )
                _write_output(converted, str(out_dir / Path(name).name))
            return 0

        for name in files:
            converted = convert_html(_read_input(name), parser=parser, display_mode=display, config=loaded_config)
            _write_output(converted, output)
        return 0
    except KeyboardInterrupt:
        return 0
    except Exception as e:
        if debug:
            import traceback

            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return 1


def on_units(json: bool = False, **kwargs) -> int:
    """Handle the units command - list the unit table"""
    from unitconv.conversion.common import UnitSystem
    from unitconv.conversion.unit_table import UNITS, canonical_tokens

    rows = []
    for token, aliases in canonical_tokens(UNITS).items():
        definition = UNITS[token]
        rows.append(
            {
                "unit": token,
                "aliases": aliases,
                "system": UnitSystem.of(definition.is_metric).name.lower(),
                "kind": definition.kind.value,
                "converts_to": definition.singular_name,
                "ratio": definition.ratio,
                "offset": definition.offset,
            }
        )

    if json:
        print(jsonlib.dumps(rows, indent=2, ensure_ascii=False))
        return 0

    table = Table(title="Recognized units", show_header=True, header_style="bold magenta")
    table.add_column("Unit", style="cyan")
    table.add_column("Aliases", style="yellow")
    table.add_column("System")
    table.add_column("Kind")
    table.add_column("Converts to", style="green")
    table.add_column("Ratio", justify="right")
    table.add_column("Offset", justify="right")
    for row in rows:
        table.add_row(
            row["unit"],
            ", ".join(row["aliases"]),
            row["system"],
            row["kind"],
            row["converts_to"],
            f"{row['ratio']:.4g}",
            f"{row['offset']:.4g}",
        )
    console.print(table)
    return 0


def on_stylesheet(output: Optional[str] = None, **kwargs) -> int:
    """Handle the stylesheet command - print the bundled units.css"""
    try:
        from unitconv.conversion.display import load_stylesheet

        _write_output(load_stylesheet(), output)
        return 0
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
