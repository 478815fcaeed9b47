"""
Fertilizer calculator.

Nutrient deficit per hectare = crop requirement - soil test level (never
below zero), scaled by area. The deficit is then met with either three
synthetic products (Urea / DAP / MOP) or three organic products
(Farmyard Manure / Vermicompost / Neem Cake).

Synthetic products each carry a single nutrient, so each mass follows from
one deficit. Organic products carry all three; the mass used is the largest
of the three per-nutrient masses, which meets every deficit and over-supplies
the other two.
"""

import logging

from .base import BaseCalculator, CalculationError
from ..reference_data import BAG_SIZE_KG

logger = logging.getLogger(__name__)

MODES = ("synthetic", "organic")

MISSING_CROP_MESSAGE = "Please select a crop to calculate fertilizer requirements."

SYNTHETIC_SCHEDULE = [
    {
        "stage": "Basal Application (Before Sowing)",
        "fertilizers": [{"name": "DAP", "percentage": 100}, {"name": "MOP", "percentage": 50}],
    },
    {
        "stage": "First Top Dressing (30 days after sowing)",
        "fertilizers": [{"name": "Urea", "percentage": 50}, {"name": "MOP", "percentage": 25}],
    },
    {
        "stage": "Second Top Dressing (60 days after sowing)",
        "fertilizers": [{"name": "Urea", "percentage": 50}, {"name": "MOP", "percentage": 25}],
    },
]

ORGANIC_SCHEDULE = [
    {
        "stage": "Pre-Sowing Application (2-3 weeks before sowing)",
        "fertilizers": [{"name": "Farmyard Manure", "percentage": 100}, {"name": "Neem Cake", "percentage": 50}],
    },
    {
        "stage": "Sowing Time Application",
        "fertilizers": [{"name": "Vermicompost", "percentage": 50}],
    },
    {
        "stage": "Vegetative Growth Stage",
        "fertilizers": [{"name": "Vermicompost", "percentage": 50}, {"name": "Neem Cake", "percentage": 50}],
    },
]


class FertilizerCalculator(BaseCalculator):
    """N-P-K deficit and product quantities for one crop and field."""

    name = "fertilizer"

    def calculate(self, fields: dict) -> dict:
        crop = (fields.get("crop") or "").strip().lower()
        if not crop:
            raise CalculationError(MISSING_CROP_MESSAGE)
        requirement = self.tables.crop_requirements.get(crop)
        if requirement is None:
            raise CalculationError(
                f"Unknown crop: {crop}. Available: {sorted(self.tables.crop_requirements)}"
            )

        mode = (fields.get("mode") or "synthetic").lower()
        if mode not in MODES:
            raise CalculationError(f"Unknown fertilizer mode: {mode}. Use 'synthetic' or 'organic'.")

        area = self.require_positive(fields, "area", "Area")
        hectares = self.to_hectares(area, fields.get("area_unit", "hectare"))

        deficits = self.nutrient_deficits(requirement, fields, hectares)

        if mode == "synthetic":
            fertilizers = self.synthetic_products(deficits)
            schedule = SYNTHETIC_SCHEDULE
        else:
            fertilizers = self.organic_products(deficits)
            schedule = ORGANIC_SCHEDULE

        total_cost = sum(item["cost"] for item in fertilizers)
        logger.debug("Fertilizer (%s, %s): deficits=%s total_cost=%.2f", crop, mode, deficits, total_cost)

        return {
            "crop": crop,
            "mode": mode,
            "area_hectares": round(hectares, 4),
            "nutrients": {key: round(value, 2) for key, value in deficits.items()},
            "fertilizers": fertilizers,
            "total_cost": round(total_cost, 2),
            "application_schedule": [
                {"stage": s["stage"], "fertilizers": [dict(f) for f in s["fertilizers"]]}
                for s in schedule
            ],
        }

    def nutrient_deficits(self, requirement: dict, fields: dict, hectares: float) -> dict:
        """Required N, P, K in kg for the whole area. Always >= 0."""
        deficits = {}
        for nutrient in ("n", "p", "k"):
            soil_level = self.require_non_negative(fields, f"soil_{nutrient}", f"Soil {nutrient.upper()}")
            deficits[nutrient] = max(0.0, requirement[nutrient] - soil_level) * hectares
        return deficits

    def synthetic_products(self, deficits: dict) -> list:
        prices = self.tables.fertilizer_prices
        items = []
        for key, product in self.tables.synthetic_products.items():
            deficit = deficits[product["nutrient"].lower()]
            amount = deficit / product["content"] * product["conversion"]
            cost = amount / BAG_SIZE_KG * prices[key]
            items.append(self._make_item(product["name"], amount, cost, product["nutrient"]))
        return items

    def organic_products(self, deficits: dict) -> list:
        prices = self.tables.fertilizer_prices
        items = []
        for key, product in self.tables.organic_products.items():
            amount = max(deficits[nutrient] / product[nutrient] for nutrient in ("n", "p", "k"))
            cost = amount * prices[key]
            items.append(self._make_item(product["name"], amount, cost, "N-P-K"))
        return items

    def _make_item(self, name: str, amount: float, cost: float, nutrient: str) -> dict:
        return {
            "name": name,
            "amount": round(amount, 2),
            "unit": "kg",
            "cost": round(cost, 2),
            "nutrient": nutrient,
        }
