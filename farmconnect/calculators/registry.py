"""
Calculator registry: maps calculator names to calculator classes.
"""

from .base import BaseCalculator
from .carbon_footprint import CarbonFootprintCalculator
from .fertilizer import FertilizerCalculator
from .loan import LoanCalculator
from ..reference_data import ReferenceTables

CALCULATOR_REGISTRY: dict[str, type] = {
    "carbon_footprint": CarbonFootprintCalculator,
    "fertilizer": FertilizerCalculator,
    "loan": LoanCalculator,
}


def get_calculator(name: str, tables: ReferenceTables = None) -> BaseCalculator:
    """Returns an instance of the calculator for a name, or raises ValueError."""
    if name not in CALCULATOR_REGISTRY:
        raise ValueError(
            f"No calculator registered for: {name}. "
            f"Available: {list(CALCULATOR_REGISTRY.keys())}"
        )
    return CALCULATOR_REGISTRY[name](tables)


def has_calculator(name: str) -> bool:
    """Check if a calculator exists for a name."""
    return name in CALCULATOR_REGISTRY


def list_calculators() -> list[str]:
    """List all registered calculator names."""
    return list(CALCULATOR_REGISTRY.keys())
