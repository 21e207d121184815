"""Unit tests for payment frequency and interest rate conversions"""

import pytest
from datetime import date
from ledger_outlook.domain.rates import (
    advance_date,
    effective_annual_rate,
    mortgage_payment,
    payment_amount,
    periodic_rate,
    periods_per_year,
    total_payments,
)


@pytest.mark.parametrize(
    "frequency,expected",
    [
        ("WEEKLY", 52),
        ("ACCELERATED_WEEKLY", 52),
        ("BIWEEKLY", 26),
        ("ACCELERATED_BIWEEKLY", 26),
        ("SEMI_MONTHLY", 24),
        ("MONTHLY", 12),
        ("QUARTERLY", 4),
        ("YEARLY", 1),
    ],
)
def test_periods_per_year(frequency, expected):
    assert periods_per_year(frequency) == expected


def test_periods_per_year_unknown_defaults_to_monthly():
    """Unrecognized or missing frequency never yields zero periods"""
    assert periods_per_year("FORTNIGHTLY") == 12
    assert periods_per_year(None) == 12


def test_periodic_rate_canadian_fixed_compounds_semi_annually():
    rate = periodic_rate(6.0, 12, is_canadian_mortgage=True, is_variable_rate=False)

    assert rate != pytest.approx(6.0 / 100 / 12)
    assert rate == pytest.approx(1.03 ** (1 / 6) - 1)
    assert rate < 6.0 / 100 / 12


def test_periodic_rate_canadian_variable_is_prorated():
    rate = periodic_rate(6.0, 12, is_canadian_mortgage=True, is_variable_rate=True)
    assert rate == pytest.approx(0.005)


def test_periodic_rate_standard_is_prorated():
    assert periodic_rate(6.0, 12) == pytest.approx(0.005)
    assert periodic_rate(5.2, 52) == pytest.approx(0.001)


def test_periodic_rate_zero():
    assert periodic_rate(0, 12, is_canadian_mortgage=True) == 0.0


def test_advance_date_semi_monthly_before_15th():
    assert advance_date(date(2026, 1, 10), "SEMI_MONTHLY") == date(2026, 1, 15)


def test_advance_date_semi_monthly_after_15th():
    assert advance_date(date(2026, 1, 20), "SEMI_MONTHLY") == date(2026, 2, 1)


def test_advance_date_semi_monthly_on_15th_rolls_to_next_month():
    assert advance_date(date(2026, 1, 15), "SEMI_MONTHLY") == date(2026, 2, 1)
    assert advance_date(date(2026, 12, 15), "SEMI_MONTHLY") == date(2027, 1, 1)


def test_advance_date_quarterly_adds_three_months():
    assert advance_date(date(2026, 1, 10), "QUARTERLY") == date(2026, 4, 10)
    assert advance_date(date(2026, 11, 5), "QUARTERLY") == date(2027, 2, 5)


def test_advance_date_clamps_to_month_end():
    """Jan 31 + 3 months lands on Apr 30, not May 1"""
    assert advance_date(date(2026, 1, 31), "QUARTERLY") == date(2026, 4, 30)
    assert advance_date(date(2024, 1, 31), "MONTHLY") == date(2024, 2, 29)


@pytest.mark.parametrize(
    "frequency,expected",
    [
        ("WEEKLY", date(2026, 3, 8)),
        ("ACCELERATED_WEEKLY", date(2026, 3, 8)),
        ("BIWEEKLY", date(2026, 3, 15)),
        ("ACCELERATED_BIWEEKLY", date(2026, 3, 15)),
        ("MONTHLY", date(2026, 4, 1)),
        ("YEARLY", date(2027, 3, 1)),
        ("SOMETHING_ELSE", date(2026, 4, 1)),
    ],
)
def test_advance_date_by_frequency(frequency, expected):
    assert advance_date(date(2026, 3, 1), frequency) == expected


def test_advance_date_leaves_input_untouched():
    start = date(2026, 1, 10)
    advance_date(start, "MONTHLY")
    assert start == date(2026, 1, 10)


def test_effective_annual_rate():
    assert effective_annual_rate(6.0, is_canadian_mortgage=True) == 6.09
    assert effective_annual_rate(6.0) == 6.17
    assert effective_annual_rate(6.0, is_canadian_mortgage=True, is_variable_rate=True) == 6.17
    assert effective_annual_rate(0) == 0.0


def test_payment_amount_standard_formula():
    """30-year loan at 6% nominal, monthly"""
    assert payment_amount(100000, 0.005, 360) == 599.55


def test_payment_amount_zero_rate_splits_evenly():
    assert payment_amount(1200, 0, 12) == 100
    assert payment_amount(1000, 0, 3) == 333.33


def test_mortgage_payment_matches_monthly_formula():
    assert mortgage_payment(100000, 6.0, 360, "MONTHLY") == 599.55


def test_mortgage_payment_canadian_is_cheaper_than_prorated():
    canadian = mortgage_payment(100000, 6.0, 300, "MONTHLY", is_canadian_mortgage=True)
    prorated = mortgage_payment(100000, 6.0, 300, "MONTHLY")
    assert canadian < prorated


def test_mortgage_payment_accelerated_from_monthly():
    monthly = mortgage_payment(300000, 4.0, 300, "MONTHLY", is_canadian_mortgage=True)

    assert mortgage_payment(300000, 4.0, 300, "ACCELERATED_BIWEEKLY", is_canadian_mortgage=True) == round(monthly / 2, 2)
    assert mortgage_payment(300000, 4.0, 300, "ACCELERATED_WEEKLY", is_canadian_mortgage=True) == round(monthly / 4, 2)


def test_mortgage_payment_plain_biweekly_is_less_than_accelerated():
    biweekly = mortgage_payment(300000, 4.0, 300, "BIWEEKLY", is_canadian_mortgage=True)
    accelerated = mortgage_payment(300000, 4.0, 300, "ACCELERATED_BIWEEKLY", is_canadian_mortgage=True)
    assert biweekly < accelerated


def test_total_payments_zero_rate():
    assert total_payments(1000, 0, 100) == 10
    assert total_payments(1050, 0, 100) == 11


def test_total_payments_rounds_up():
    """5000 at 5%/12 with 500 payments needs 10.24 periods"""
    assert total_payments(5000, 0.05 / 12, 500) == 11


def test_total_payments_standard_formula():
    """100k at 0.5% per period paying 600 needs 359.25 periods"""
    assert total_payments(100000, 0.005, 600) == 360


def test_total_payments_never_amortizing():
    assert total_payments(200000, 0.004, 500) is None
    assert total_payments(1000, 0.01, 0) is None


def test_total_payments_nothing_owing():
    assert total_payments(0, 0.01, 100) == 0
