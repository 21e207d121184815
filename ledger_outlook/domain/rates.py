"""Payment frequency and interest rate conversions for debt accounts"""

import math
from datetime import date, timedelta
from typing import Optional

from ledger_outlook.domain.models import PaymentFrequency
from ledger_outlook.utils.date_utils import add_months

_PERIODS_PER_YEAR = {
    PaymentFrequency.WEEKLY: 52,
    PaymentFrequency.ACCELERATED_WEEKLY: 52,
    PaymentFrequency.BIWEEKLY: 26,
    PaymentFrequency.ACCELERATED_BIWEEKLY: 26,
    PaymentFrequency.SEMI_MONTHLY: 24,
    PaymentFrequency.MONTHLY: 12,
    PaymentFrequency.QUARTERLY: 4,
    PaymentFrequency.YEARLY: 1,
}

_DAYS_PER_STEP = {
    PaymentFrequency.WEEKLY: 7,
    PaymentFrequency.ACCELERATED_WEEKLY: 7,
    PaymentFrequency.BIWEEKLY: 14,
    PaymentFrequency.ACCELERATED_BIWEEKLY: 14,
}

_MONTHS_PER_STEP = {
    PaymentFrequency.QUARTERLY: 3,
    PaymentFrequency.YEARLY: 12,
}

# Accelerated payments are the monthly payment split evenly
_ACCELERATED_DIVISORS = {
    PaymentFrequency.ACCELERATED_BIWEEKLY: 2,
    PaymentFrequency.ACCELERATED_WEEKLY: 4,
}


def periods_per_year(frequency: Optional[str]) -> int:
    """Payment periods per year; unrecognized frequencies are treated as monthly"""
    return _PERIODS_PER_YEAR.get(frequency, 12)


def periodic_rate(
    annual_rate_percent: float,
    periods: int,
    is_canadian_mortgage: bool = False,
    is_variable_rate: bool = False,
) -> float:
    """
    Interest rate for one payment period, as a fraction.

    Canadian fixed-rate mortgages compound semi-annually regardless of payment
    frequency: r_periodic = (1 + r_annual/2)^(2/n) - 1. Everything else is
    prorated: r_annual / n.

    Args:
        annual_rate_percent: Nominal annual rate as a percentage (4.0 = 4%)
        periods: Payment periods per year (see periods_per_year)
    """
    if annual_rate_percent == 0:
        return 0.0

    if is_canadian_mortgage and not is_variable_rate:
        semi_annual_rate = annual_rate_percent / 100 / 2
        return (1 + semi_annual_rate) ** (2 / periods) - 1

    return annual_rate_percent / 100 / periods


def advance_date(from_date: date, frequency: Optional[str]) -> date:
    """
    Next payment date after from_date.

    SEMI_MONTHLY alternates between the 15th and the 1st of the next month.
    Month-based steps clamp to the end of shorter months.
    """
    if frequency in _DAYS_PER_STEP:
        return from_date + timedelta(days=_DAYS_PER_STEP[frequency])

    if frequency == PaymentFrequency.SEMI_MONTHLY:
        if from_date.day < 15:
            return from_date.replace(day=15)
        return add_months(from_date.replace(day=1), 1)

    return add_months(from_date, _MONTHS_PER_STEP.get(frequency, 1))


def effective_annual_rate(
    annual_rate_percent: float,
    is_canadian_mortgage: bool = False,
    is_variable_rate: bool = False,
) -> float:
    """
    Effective annual rate as a percentage rounded to 2 decimals.

    Semi-annual compounding for Canadian fixed-rate mortgages, monthly otherwise.
    """
    if is_canadian_mortgage and not is_variable_rate:
        ear = (1 + annual_rate_percent / 100 / 2) ** 2 - 1
    else:
        ear = (1 + annual_rate_percent / 100 / 12) ** 12 - 1
    return round(ear * 100, 2)


def payment_amount(principal: float, periodic_rate: float, total_payments: int) -> float:
    """
    Level payment that retires principal in total_payments periods.

    PMT = P * r(1+r)^n / ((1+r)^n - 1); at 0% the principal is split evenly.
    """
    if periodic_rate == 0:
        return round(principal / total_payments, 2)

    growth = (1 + periodic_rate) ** total_payments
    return round(principal * periodic_rate * growth / (growth - 1), 2)


def mortgage_payment(
    principal: float,
    annual_rate_percent: float,
    amortization_months: int,
    frequency: Optional[str],
    is_canadian_mortgage: bool = False,
    is_variable_rate: bool = False,
) -> float:
    """
    Scheduled payment for a mortgage amortized over amortization_months.

    Accelerated frequencies pay half (biweekly) or a quarter (weekly) of the
    monthly payment, which retires the loan faster than the plain frequency.
    """
    if frequency in _ACCELERATED_DIVISORS:
        monthly_rate = periodic_rate(annual_rate_percent, 12, is_canadian_mortgage, is_variable_rate)
        monthly = payment_amount(principal, monthly_rate, amortization_months)
        return round(monthly / _ACCELERATED_DIVISORS[frequency], 2)

    periods = periods_per_year(frequency)
    total = round(amortization_months * periods / 12)
    rate = periodic_rate(annual_rate_percent, periods, is_canadian_mortgage, is_variable_rate)
    return payment_amount(principal, rate, total)


def total_payments(principal: float, periodic_rate: float, payment: float) -> Optional[int]:
    """
    Closed-form number of payments to retire principal: n = -ln(1 - P*r/A) / ln(1 + r), rounded up.

    Returns None when the payment never covers the interest charge.
    """
    if principal <= 0:
        return 0
    if payment <= 0:
        return None
    if periodic_rate == 0:
        return math.ceil(principal / payment)
    if payment <= principal * periodic_rate:
        return None

    n = -math.log(1 - principal * periodic_rate / payment) / math.log(1 + periodic_rate)
    return math.ceil(n)
