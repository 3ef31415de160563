#!/usr/bin/env python3
"""Common data structures shared across conversion modules."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .constants import IMPERIAL_CLASS_NAME, SI_CLASS_NAME


class UnitSystem(Enum):
    """Unit family of a quantity, valued by its annotation class."""

    SI = SI_CLASS_NAME
    IMPERIAL = IMPERIAL_CLASS_NAME

    @classmethod
    def of(cls, is_metric: bool) -> "UnitSystem":
        return cls.SI if is_metric else cls.IMPERIAL

    @property
    def opposite(self) -> "UnitSystem":
        return UnitSystem.IMPERIAL if self is UnitSystem.SI else UnitSystem.SI


@dataclass
class QuantityMatch:
    """A quantity recognized in the flattened text"""

    start: int
    end: int
    text: str
    left_value: float
    right_value: Optional[float]
    unit_token: str

    def __post_init__(self):
        if not 0 <= self.start < self.end:
            raise ValueError(f"Invalid quantity span [{self.start}, {self.end})")

    @property
    def is_range(self) -> bool:
        return self.right_value is not None
