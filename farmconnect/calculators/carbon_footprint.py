"""
Carbon footprint calculator.

Emissions per category = usage x emission factor, with fertilizer, pesticide,
irrigation and machinery also scaled by farm size in hectares. Livestock,
electricity and fuel are whole-farm figures and are not area-scaled.
"""

import logging

from .base import BaseCalculator
from ..reference_data import AREA_SCALED_CATEGORIES, RATING_BANDS, RATING_TOP

logger = logging.getLogger(__name__)

# Display name -> (input field, emission factor key)
CATEGORIES = [
    ("Fertilizer", "fertilizer", "fertilizer"),
    ("Pesticide", "pesticide", "pesticide"),
    ("Irrigation", "irrigation", "irrigation"),
    ("Machinery", "machinery", "machinery"),
    ("Livestock", "livestock", "livestock"),
    ("Electricity", "electricity_usage", "electricity"),
    ("Fuel", "fuel_usage", "fuel"),
]

CROP_TYPES = ["rice", "wheat", "maize", "cotton", "sugarcane", "vegetables", "fruits"]

REDUCTION_STRATEGIES = {
    "Fertilizer": {
        "recommendations": [
            "Switch to organic fertilizers",
            "Implement precision agriculture techniques",
            "Use nitrogen-fixing cover crops",
            "Conduct regular soil tests to optimize fertilizer application",
        ],
        "potential_reduction": "20-30%",
    },
    "Pesticide": {
        "recommendations": [
            "Implement integrated pest management (IPM)",
            "Use biological pest control methods",
            "Plant pest-resistant crop varieties",
            "Use targeted application methods to reduce overall usage",
        ],
        "potential_reduction": "15-25%",
    },
    "Irrigation": {
        "recommendations": [
            "Install drip irrigation systems",
            "Implement rainwater harvesting",
            "Use soil moisture sensors to optimize irrigation timing",
            "Plant drought-resistant crop varieties",
        ],
        "potential_reduction": "20-40%",
    },
    "Machinery": {
        "recommendations": [
            "Optimize field operations to reduce tractor passes",
            "Maintain equipment regularly for fuel efficiency",
            "Consider no-till or reduced tillage practices",
            "Upgrade to more fuel-efficient machinery",
        ],
        "potential_reduction": "10-20%",
    },
    "Livestock": {
        "recommendations": [
            "Improve feed quality to reduce methane emissions",
            "Implement rotational grazing",
            "Manage manure properly",
            "Consider methane capture systems for larger operations",
        ],
        "potential_reduction": "15-30%",
    },
    "Electricity": {
        "recommendations": [
            "Install solar panels or wind turbines",
            "Use energy-efficient equipment",
            "Optimize timing of electricity usage",
            "Implement energy-saving practices in farm buildings",
        ],
        "potential_reduction": "30-50%",
    },
    "Fuel": {
        "recommendations": [
            "Reduce unnecessary equipment operation",
            "Maintain vehicles and machinery for optimal efficiency",
            "Consider biofuels or electric alternatives where possible",
            "Optimize transportation routes",
        ],
        "potential_reduction": "10-25%",
    },
}

GENERIC_STRATEGY = {
    "recommendations": [
        "Analyze usage patterns",
        "Research efficient alternatives",
        "Implement best practices for your specific operation",
    ],
    "potential_reduction": "10-20%",
}

MAX_RECOMMENDATIONS = 3


def rate_emissions(per_hectare: float) -> dict:
    """Map per-hectare emissions to a Low / Moderate / High rating."""
    for upper, label, color in RATING_BANDS:
        if per_hectare < upper:
            return {"label": label, "color": color}
    label, color = RATING_TOP
    return {"label": label, "color": color}


def recommend_reductions(breakdown: list, limit: int = MAX_RECOMMENDATIONS) -> list:
    """Mitigation actions for the `limit` largest emission sources."""
    ranked = sorted(breakdown, key=lambda entry: entry["value"], reverse=True)
    recommendations = []
    for entry in ranked[:limit]:
        strategy = REDUCTION_STRATEGIES.get(entry["name"], GENERIC_STRATEGY)
        recommendations.append({
            "source": entry["name"],
            "recommendations": list(strategy["recommendations"]),
            "potential_reduction": strategy["potential_reduction"],
        })
    return recommendations


class CarbonFootprintCalculator(BaseCalculator):
    """Farm carbon footprint in kg CO2e."""

    name = "carbon_footprint"

    def calculate(self, fields: dict) -> dict:
        farm_size = self.require_positive(fields, "farm_size", "Farm size")
        hectares = self.to_hectares(farm_size, fields.get("farm_unit", "hectare"))
        factors = self.tables.emission_factors

        values = {}
        for label, field, factor_key in CATEGORIES:
            usage = self.require_non_negative(fields, field, label)
            emissions = usage * factors[factor_key]
            if factor_key in AREA_SCALED_CATEGORIES:
                emissions *= hectares
            values[label] = emissions

        total = sum(values.values())
        per_hectare = total / hectares

        breakdown = [
            {
                "name": label,
                "value": round(value, 2),
                "percentage": self.percentage(value, total),
            }
            for label, value in values.items()
        ]

        assumptions = [
            "Emission factors are simplified averages, not crop- or region-specific.",
        ]
        if total == 0:
            assumptions.append("No emission sources entered; category percentages reported as 0%.")

        logger.debug("Carbon footprint: total=%.2f kg CO2e over %.4f ha", total, hectares)

        return {
            "crop_type": fields.get("crop_type"),
            "farm_size_hectares": round(hectares, 4),
            "total_emissions": round(total, 2),
            "emissions_per_hectare": round(per_hectare, 2),
            "breakdown": breakdown,
            "rating": rate_emissions(per_hectare),
            "recommendations": recommend_reductions(breakdown),
            "assumptions": assumptions,
        }
