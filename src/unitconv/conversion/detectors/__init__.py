"""Quantity detectors over flattened text."""

from .quantity_detector import QuantityDetector

__all__ = ["QuantityDetector"]
