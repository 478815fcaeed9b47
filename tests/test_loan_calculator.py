"""
Loan calculator tests: EMI formula, amortization schedule, loan types.
"""

import pytest

from farmconnect.calculators.base import CalculationError
from farmconnect.calculators.loan import LoanCalculator, number_of_payments, periodic_payment


def _calc(**fields):
    base = {"loan_amount": 100000, "interest_rate": 7, "loan_tenure": 12, "payment_frequency": "monthly"}
    base.update(fields)
    return LoanCalculator().calculate(base)


def test_monthly_emi_matches_formula():
    result = _calc()
    assert result["number_of_payments"] == 12
    assert result["emi"] == pytest.approx(8652.67, abs=0.05)
    assert result["total_payment"] == pytest.approx(103832.0, abs=1.0)
    assert result["total_interest"] == pytest.approx(3832.0, abs=1.0)
    assert result["rate_per_period"] == pytest.approx(0.005833, abs=1e-6)


def test_schedule_pays_off_principal():
    result = _calc()
    schedule = result["amortization_schedule"]
    assert len(schedule) == 12
    assert [row["payment_number"] for row in schedule] == list(range(1, 13))
    assert schedule[-1]["remaining_principal"] == 0.0
    assert sum(row["principal_payment"] for row in schedule) == pytest.approx(100000, abs=0.1)
    # Interest share falls as the balance falls
    assert schedule[0]["interest_payment"] > schedule[-1]["interest_payment"]
    assert schedule[0]["interest_payment"] == pytest.approx(583.33, abs=0.01)


def test_totals_are_consistent():
    result = _calc(loan_amount=250000, interest_rate=9.5, loan_tenure=36)
    assert result["total_payment"] == pytest.approx(result["emi"] * 36, abs=1.0)
    assert result["total_interest"] == pytest.approx(result["total_payment"] - 250000, abs=0.05)
    assert result["pie_chart_data"] == [
        {"name": "Principal", "value": 250000},
        {"name": "Interest", "value": result["total_interest"]},
    ]
    assert len(result["chart_data"]) == 36


def test_quarterly_rounds_payments_up_and_keeps_monthly_rate():
    result = _calc(loan_tenure=13, payment_frequency="quarterly")
    assert result["number_of_payments"] == 5
    assert result["rate_per_period"] == pytest.approx(7 / 100 / 12, abs=1e-6)
    assert len(result["assumptions"]) == 1
    assert "not rescaled" in result["assumptions"][0]


def test_monthly_has_no_assumption_notes():
    assert _calc()["assumptions"] == []


def test_number_of_payments():
    assert number_of_payments(12, "monthly") == 12
    assert number_of_payments(12, "quarterly") == 4
    assert number_of_payments(12, "half-yearly") == 2
    assert number_of_payments(18, "yearly") == 2
    with pytest.raises(CalculationError):
        number_of_payments(12, "weekly")


def test_periodic_payment_single_period():
    # One payment repays principal plus one period of interest
    assert periodic_payment(1000, 0.01, 1) == pytest.approx(1010.0)


def test_loan_type_supplies_default_rate():
    result = _calc(loan_type="term", interest_rate=None, loan_tenure=24)
    assert result["loan_details"]["interest_rate"] == 8.5
    assert result["loan_details"]["loan_type"] == "term"


def test_explicit_rate_overrides_loan_type():
    result = _calc(loan_type="kcc", interest_rate=4)
    assert result["loan_details"]["interest_rate"] == 4


def test_loan_type_max_tenure_enforced():
    with pytest.raises(CalculationError, match="at most 12 months"):
        _calc(loan_type="kcc", loan_tenure=24)


def test_unknown_loan_type_rejected():
    with pytest.raises(CalculationError, match="Unknown loan type"):
        _calc(loan_type="gold")


@pytest.mark.parametrize("field,value", [
    ("loan_amount", 0),
    ("loan_amount", -5000),
    ("interest_rate", 0),
    ("loan_tenure", 0),
])
def test_non_positive_inputs_rejected(field, value):
    with pytest.raises(CalculationError):
        _calc(**{field: value})


def test_missing_rate_without_loan_type_rejected():
    with pytest.raises(CalculationError, match="Interest rate"):
        _calc(interest_rate=None)


def test_tiny_rate_rejected():
    # (1 + r) ** n rounds to exactly 1.0
    with pytest.raises(CalculationError, match="too small"):
        _calc(interest_rate=1e-15)


def test_overflowing_growth_rejected():
    with pytest.raises(CalculationError, match="too large"):
        periodic_payment(1000, 1e6, 360)


def test_tenure_capped():
    assert _calc(loan_tenure=360)["number_of_payments"] == 360
    with pytest.raises(CalculationError, match="cannot exceed 360 months"):
        _calc(loan_tenure=200000)
