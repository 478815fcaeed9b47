"""
Loan amortization calculator.

Standard fixed-rate amortizing loan:
    EMI = P * r * (1 + r)^n / ((1 + r)^n - 1)

r is the monthly rate (annual / 100 / 12) for every payment frequency;
quarterly, half-yearly and yearly plans only change the number of payments.
Non-monthly results note this in `assumptions`.
"""

import logging
import math

from .base import BaseCalculator, CalculationError

logger = logging.getLogger(__name__)

# Months covered by one payment
PAYMENT_FREQUENCIES = {
    "monthly": 1,
    "quarterly": 3,
    "half-yearly": 6,
    "yearly": 12,
}

MAX_TENURE_MONTHS = 360


def number_of_payments(tenure_months: int, frequency: str) -> int:
    """Payments needed to cover the tenure. Partial periods round up."""
    if frequency not in PAYMENT_FREQUENCIES:
        raise CalculationError(
            f"Unknown payment frequency: {frequency}. Available: {list(PAYMENT_FREQUENCIES)}"
        )
    return math.ceil(tenure_months / PAYMENT_FREQUENCIES[frequency])


def periodic_payment(principal: float, rate: float, periods: int) -> float:
    """Installment that repays `principal` over `periods` at `rate` per period."""
    try:
        growth = (1 + rate) ** periods
    except OverflowError:
        raise CalculationError("Interest rate and tenure are too large to calculate.") from None
    if growth - 1 == 0:
        raise CalculationError("Interest rate is too small to calculate an installment.")
    return principal * rate * growth / (growth - 1)


class LoanCalculator(BaseCalculator):
    """EMI, amortization schedule and totals for an agricultural loan."""

    name = "loan"

    def calculate(self, fields: dict) -> dict:
        loan_type_key = fields.get("loan_type")
        loan_type = None
        if loan_type_key:
            loan_type = self.tables.loan_types.get(loan_type_key)
            if loan_type is None:
                raise CalculationError(
                    f"Unknown loan type: {loan_type_key}. Available: {list(self.tables.loan_types)}"
                )

        principal = self.require_positive(fields, "loan_amount", "Loan amount")

        if fields.get("interest_rate") is None and loan_type is not None:
            annual_rate = float(loan_type["interest_rate"])
        else:
            annual_rate = self.require_positive(fields, "interest_rate", "Interest rate")

        tenure = self.parse_int(fields.get("loan_tenure"))
        if tenure <= 0:
            raise CalculationError("Loan tenure must be a positive number.")
        if tenure > MAX_TENURE_MONTHS:
            raise CalculationError(f"Loan tenure cannot exceed {MAX_TENURE_MONTHS} months.")
        if loan_type is not None and tenure > loan_type["max_tenure"]:
            raise CalculationError(
                f"{loan_type['name']} allows a tenure of at most {loan_type['max_tenure']} months."
            )

        frequency = fields.get("payment_frequency") or "monthly"
        periods = number_of_payments(tenure, frequency)
        rate = annual_rate / 100 / 12

        emi = periodic_payment(principal, rate, periods)
        schedule, total_interest, total_payment = self.amortization_schedule(principal, rate, periods, emi)

        assumptions = []
        if frequency != "monthly":
            assumptions.append(
                "Interest is charged at the monthly rate per payment period; "
                "it is not rescaled for the selected payment frequency."
            )

        logger.debug("Loan: P=%.2f rate=%.6f n=%d emi=%.2f", principal, rate, periods, emi)

        return {
            "emi": round(emi, 2),
            "number_of_payments": periods,
            "rate_per_period": round(rate, 6),
            "total_payment": round(total_payment, 2),
            "total_interest": round(total_interest, 2),
            "amortization_schedule": schedule,
            "chart_data": [
                {
                    "payment_number": row["payment_number"],
                    "principal": row["principal_payment"],
                    "interest": row["interest_payment"],
                }
                for row in schedule
            ],
            "pie_chart_data": [
                {"name": "Principal", "value": round(principal, 2)},
                {"name": "Interest", "value": round(total_interest, 2)},
            ],
            "loan_details": {
                "loan_type": loan_type_key,
                "principal": principal,
                "interest_rate": annual_rate,
                "tenure": tenure,
                "payment_frequency": frequency,
            },
            "assumptions": assumptions,
        }

    def amortization_schedule(self, principal: float, rate: float, periods: int, emi: float):
        """One row per payment. Returns (rows, total_interest, total_payment)."""
        rows = []
        remaining = principal
        total_interest = 0.0
        total_payment = 0.0

        for number in range(1, periods + 1):
            interest = remaining * rate
            principal_part = emi - interest
            remaining -= principal_part
            total_interest += interest
            total_payment += emi

            rows.append({
                "payment_number": number,
                "payment_amount": round(emi, 2),
                "principal_payment": round(principal_part, 2),
                "interest_payment": round(interest, 2),
                "remaining_principal": round(max(0.0, remaining), 2),
            })

        return rows, total_interest, total_payment
