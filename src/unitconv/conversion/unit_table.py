#!/usr/bin/env python3
"""
Unit definitions for the metric <-> imperial conversions.

Every definition converts FROM the system of the token that names it TO the
opposite system: ``converted = (value + offset) * ratio``. Aliases share the
definition object of their canonical token, and the table itself is a
read-only mapping built once at import.

Millimeters, centimeters and inches are not in the table. On cycling pages
they mostly name part sizes such as tire widths and crank lengths.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class UnitKind(Enum):
    DISTANCE = "distance"
    MASS = "mass"
    TEMPERATURE = "temperature"
    SPEED = "speed"


class UnknownUnitError(KeyError):
    """Raised when a token does not name a unit in the table."""


class UnitTableError(ValueError):
    """Raised when a unit table has a unit without a valid counterpart."""


@dataclass(frozen=True)
class UnitDefinition:
    """How to convert a quantity in one unit to its counterpart system."""

    is_metric: bool
    offset: float
    ratio: float
    singular_name: str
    plural_name: str = ""
    kind: UnitKind = UnitKind.DISTANCE

    def __post_init__(self):
        if not self.plural_name:
            # Frozen, so go through object.__setattr__
            object.__setattr__(self, "plural_name", self.singular_name)

    def display_name(self, plural: bool) -> str:
        return self.plural_name if plural else self.singular_name


def _build_units() -> Mapping[str, UnitDefinition]:
    units: dict[str, UnitDefinition] = {
        # NAME          METRIC  OFFSET     RATIO   DISPLAY, PLURAL
        "ft": UnitDefinition(False, 0, 0.3048, "m", kind=UnitKind.DISTANCE),
        "yard": UnitDefinition(False, 0, 0.9144, "m", kind=UnitKind.DISTANCE),
        "m": UnitDefinition(True, 0, 3.28, "ft", kind=UnitKind.DISTANCE),
        "mile": UnitDefinition(False, 0, 1.609, "km", kind=UnitKind.DISTANCE),
        "km": UnitDefinition(True, 0, 0.626, "mile", "miles", kind=UnitKind.DISTANCE),
        "mph": UnitDefinition(False, 0, 1.609, "kph", kind=UnitKind.SPEED),
        "kph": UnitDefinition(True, 0, 0.626, "mph", kind=UnitKind.SPEED),
        "lb": UnitDefinition(False, 0, 0.454, "kg", kind=UnitKind.MASS),
        "kg": UnitDefinition(True, 0, 2.204, "lb", "lbs", kind=UnitKind.MASS),
        "stone": UnitDefinition(False, 0, 6.35, "kg", kind=UnitKind.MASS),
        # Absolute temperatures; a unit-delta container drops the offset.
        "°c": UnitDefinition(True, 32 * 5 / 9, 9 / 5, "°F", kind=UnitKind.TEMPERATURE),
        "°f": UnitDefinition(False, -32, 5 / 9, "°C", kind=UnitKind.TEMPERATURE),
    }

    aliases = {
        "foot": "ft",
        "feet": "ft",
        "meter": "m",
        "metre": "m",
        "kilometer": "km",
        "kilometre": "km",
        "c": "°c",
        "centigrade": "°c",
        "celsius": "°c",
        "f": "°f",
        "fahrenheit": "°f",
        # More often weight than British currency. Pounds-mass and
        # pounds-force are not distinguished.
        "pound": "lb",
        "kilogram": "kg",
        "kilogramme": "kg",
        "kilo": "kg",
    }
    for alias, canonical in aliases.items():
        units[alias] = units[canonical]

    return MappingProxyType(units)


UNITS: Mapping[str, UnitDefinition] = _build_units()


def lookup_unit(token: str, table: Mapping[str, UnitDefinition] = UNITS) -> UnitDefinition:
    """Resolve a matched unit token, ignoring case."""
    try:
        return table[token.lower()]
    except KeyError:
        raise UnknownUnitError(token) from None


def unit_tokens(table: Mapping[str, UnitDefinition] = UNITS) -> list[str]:
    """Table keys ordered longest first so the grammar prefers "kilometer" over "km"."""
    return sorted(table, key=len, reverse=True)


def counterpart(definition: UnitDefinition, table: Mapping[str, UnitDefinition] = UNITS) -> UnitDefinition:
    """The definition of the unit that ``definition`` converts into."""
    return lookup_unit(definition.singular_name, table)


def validate_unit_table(table: Mapping[str, UnitDefinition]) -> None:
    """Check that every unit converts into a unit of the same kind in the other system."""
    for token, definition in table.items():
        try:
            target = counterpart(definition, table)
        except UnknownUnitError as e:
            raise UnitTableError(f"'{token}' converts into unknown unit {definition.singular_name!r}") from e
        if target.is_metric == definition.is_metric or target.kind is not definition.kind:
            raise UnitTableError(
                f"'{token}' converts into {definition.singular_name!r}, which is not its {definition.kind.value} counterpart"
            )


def canonical_tokens(table: Mapping[str, UnitDefinition] = UNITS) -> dict[str, list[str]]:
    """Map each canonical token to its aliases, in table order."""
    grouped: dict[int, list[str]] = {}
    for token, definition in table.items():
        grouped.setdefault(id(definition), []).append(token)
    return {tokens[0]: tokens[1:] for tokens in grouped.values()}


validate_unit_table(UNITS)
