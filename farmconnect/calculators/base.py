"""
Abstract base class for all farm calculators.

Input: validated form fields as a flat dict (from the request schema)
Output: flat result dict (serialized by the router's response model)
"""

import logging
from abc import ABC, abstractmethod

from ..reference_data import HECTARES_PER_ACRE, ReferenceTables, get_reference_tables

logger = logging.getLogger(__name__)


class CalculationError(ValueError):
    """Input a calculator cannot work with. The message is shown to the user."""


class BaseCalculator(ABC):
    """All farm calculators inherit from this."""

    name = ""

    def __init__(self, tables: ReferenceTables = None):
        self.tables = tables or get_reference_tables()

    @abstractmethod
    def calculate(self, fields: dict) -> dict:
        """
        Takes the submitted form fields.
        Returns the result dict for that calculator.
        """
        pass

    # --- Helper methods for all calculators ---

    def parse_number(self, value, default: float = 0.0) -> float:
        """Parse a numeric value from user input."""
        if value is None:
            return default
        try:
            return float(str(value).strip())
        except (ValueError, TypeError):
            return default

    def parse_int(self, value, default: int = 0) -> int:
        """Parse an integer from user input."""
        if value is None:
            return default
        try:
            return int(float(str(value).strip()))
        except (ValueError, TypeError):
            return default

    def require_positive(self, fields: dict, key: str, label: str) -> float:
        value = self.parse_number(fields.get(key))
        if value <= 0:
            raise CalculationError(f"{label} must be a positive number.")
        return value

    def require_non_negative(self, fields: dict, key: str, label: str) -> float:
        value = self.parse_number(fields.get(key))
        if value < 0:
            raise CalculationError(f"{label} cannot be negative.")
        return value

    def to_hectares(self, area: float, unit: str) -> float:
        """Convert an area to hectares. Unit is 'hectare' or 'acre'."""
        unit = (unit or "hectare").lower()
        if unit == "acre":
            return area * HECTARES_PER_ACRE
        if unit == "hectare":
            return area
        raise CalculationError(f"Unknown area unit: {unit}. Use 'hectare' or 'acre'.")

    def percentage(self, part: float, whole: float, digits: int = 1) -> float:
        """part/whole as a rounded percentage. A zero whole yields 0.0."""
        if not whole:
            return 0.0
        return round(part / whole * 100.0, digits)
