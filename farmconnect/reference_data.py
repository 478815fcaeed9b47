"""
Reference tables that parameterize the calculators, with a fallback chain:
1. Tables from the JSON file at settings.REFERENCE_DATA_PATH (if set and present)
2. DEFAULT_* tables from this file

A JSON override only needs to contain the tables it changes, e.g.
{"fertilizer_prices": {"urea": 280.0}} replaces the urea price and keeps the rest.
"""

import copy
import json
import logging

from .config import settings

logger = logging.getLogger(__name__)

HECTARES_PER_ACRE = 0.404686

# kg CO2e per unit. Area-scaled factors are per kg (or hour) per hectare.
DEFAULT_EMISSION_FACTORS = {
    "fertilizer": 3.5,
    "pesticide": 2.5,
    "irrigation": 0.5,
    "machinery": 2.0,      # per machine-hour per hectare
    "livestock": 5.0,      # per animal, flat
    "electricity": 0.8,    # per kWh, flat
    "fuel": 2.5,           # per liter, flat
}

AREA_SCALED_CATEGORIES = ("fertilizer", "pesticide", "irrigation", "machinery")

# Per-hectare emission thresholds for the rating bands (strict less-than)
RATING_BANDS = [
    (500.0, "Low", "green"),
    (1000.0, "Moderate", "yellow"),
]
RATING_TOP = ("High", "red")

# Market prices. Bagged products are per 50 kg bag, organics per kg.
DEFAULT_FERTILIZER_PRICES = {
    "urea": 266.5,
    "dap": 1350.0,
    "mop": 800.0,
    "ssp": 350.0,
    "npk_complex": 1200.0,
    "zinc_sulphate": 65.0,
    "borax": 95.0,
    "gypsum": 220.0,
    "farmyard_manure": 3.0,
    "vermicompost": 10.0,
    "neem_cake": 25.0,
    "bone_meal": 40.0,
    "compost": 5.0,
    "green_manure": 2.0,
}

BAG_SIZE_KG = 50.0

# Crop nutrient requirements, kg/hectare
DEFAULT_CROP_REQUIREMENTS = {
    "rice": {"n": 120, "p": 60, "k": 40},
    "wheat": {"n": 120, "p": 60, "k": 40},
    "maize": {"n": 150, "p": 75, "k": 50},
    "cotton": {"n": 100, "p": 50, "k": 50},
    "sugarcane": {"n": 250, "p": 100, "k": 100},
    "potato": {"n": 180, "p": 100, "k": 150},
    "tomato": {"n": 120, "p": 80, "k": 100},
    "onion": {"n": 100, "p": 50, "k": 80},
    "chilli": {"n": 120, "p": 60, "k": 60},
    "soybean": {"n": 30, "p": 60, "k": 40},
    "groundnut": {"n": 20, "p": 40, "k": 50},
    "sunflower": {"n": 80, "p": 50, "k": 40},
}

# Synthetic products: fractional nutrient content and oxide conversion
DEFAULT_SYNTHETIC_PRODUCTS = {
    "urea": {"name": "Urea", "nutrient": "N", "content": 0.46, "conversion": 1.0},
    "dap": {"name": "DAP", "nutrient": "P", "content": 0.46, "conversion": 2.29},   # P -> P2O5
    "mop": {"name": "MOP", "nutrient": "K", "content": 0.60, "conversion": 1.20},   # K -> K2O
}

# Organic products: fractional N, P, K content
DEFAULT_ORGANIC_PRODUCTS = {
    "farmyard_manure": {"name": "Farmyard Manure", "n": 0.005, "p": 0.002, "k": 0.005},
    "vermicompost": {"name": "Vermicompost", "n": 0.015, "p": 0.005, "k": 0.010},
    "neem_cake": {"name": "Neem Cake", "n": 0.04, "p": 0.01, "k": 0.015},
}

DEFAULT_LOAN_TYPES = {
    "kcc": {
        "name": "Kisan Credit Card",
        "interest_rate": 7.0,
        "max_tenure": 12,
        "description": "Short-term credit for crop production, post-harvest expenses, and farm maintenance.",
        "eligibility": "All farmers, including tenant farmers and sharecroppers.",
        "documents": ["Land ownership/tenancy documents", "Identity proof", "Address proof",
                      "Passport-sized photographs"],
    },
    "term": {
        "name": "Agricultural Term Loan",
        "interest_rate": 8.5,
        "max_tenure": 84,
        "description": "Medium to long-term loans for farm machinery, equipment, land development, etc.",
        "eligibility": "Farmers with good credit history and repayment capacity.",
        "documents": ["Land ownership documents", "Farm income proof", "Identity proof",
                      "Address proof", "Quotation for machinery/equipment"],
    },
    "micro": {
        "name": "Micro Irrigation Loan",
        "interest_rate": 6.0,
        "max_tenure": 60,
        "description": "Specialized loans for installing drip and sprinkler irrigation systems.",
        "eligibility": "Farmers looking to implement water-efficient irrigation systems.",
        "documents": ["Land ownership documents", "Farm income proof", "Identity proof",
                      "Address proof", "Irrigation system quotation"],
    },
    "warehouse": {
        "name": "Warehouse Receipt Loan",
        "interest_rate": 6.5,
        "max_tenure": 12,
        "description": "Loans against stored agricultural produce in registered warehouses.",
        "eligibility": "Farmers with produce stored in recognized warehouses.",
        "documents": ["Warehouse receipt", "Identity proof", "Address proof"],
    },
}

_DEFAULTS = {
    "emission_factors": DEFAULT_EMISSION_FACTORS,
    "fertilizer_prices": DEFAULT_FERTILIZER_PRICES,
    "crop_requirements": DEFAULT_CROP_REQUIREMENTS,
    "synthetic_products": DEFAULT_SYNTHETIC_PRODUCTS,
    "organic_products": DEFAULT_ORGANIC_PRODUCTS,
    "loan_types": DEFAULT_LOAN_TYPES,
}


class ReferenceTables:
    """Read-only view over the reference tables after overrides are applied."""

    def __init__(self, overrides: dict = None):
        self._tables = copy.deepcopy(_DEFAULTS)
        for name, table in (overrides or {}).items():
            if name not in self._tables:
                logger.warning("Ignoring unknown reference table in overrides: %s", name)
                continue
            if not isinstance(table, dict):
                raise ValueError(f"Reference table '{name}' must be a JSON object")
            self._tables[name].update(table)

    @property
    def emission_factors(self) -> dict:
        return self._tables["emission_factors"]

    @property
    def fertilizer_prices(self) -> dict:
        return self._tables["fertilizer_prices"]

    @property
    def crop_requirements(self) -> dict:
        return self._tables["crop_requirements"]

    @property
    def synthetic_products(self) -> dict:
        return self._tables["synthetic_products"]

    @property
    def organic_products(self) -> dict:
        return self._tables["organic_products"]

    @property
    def loan_types(self) -> dict:
        return self._tables["loan_types"]

    def as_dict(self) -> dict:
        return copy.deepcopy(self._tables)


def load_reference_tables(path: str = None) -> ReferenceTables:
    """Build ReferenceTables from defaults plus the JSON file at `path`, if any."""
    path = path if path is not None else settings.REFERENCE_DATA_PATH
    overrides = {}
    if path:
        try:
            with open(path) as f:
                overrides = json.load(f)
            logger.info("Loaded reference table overrides from %s", path)
        except FileNotFoundError:
            logger.warning("Reference data file %s not found, using defaults", path)
    return ReferenceTables(overrides)


_tables = None


def get_reference_tables() -> ReferenceTables:
    global _tables
    if _tables is None:
        _tables = load_reference_tables()
    return _tables
