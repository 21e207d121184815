"""Scalar statistics derived from projection output series"""

from typing import Sequence

from ledger_outlook.domain.models import (
    Account,
    ForecastSummary,
    PayoffProjection,
    PayoffSummary,
    ProjectionStatus,
)
from ledger_outlook.domain.amortization import can_project
from ledger_outlook.domain.rates import (
    effective_annual_rate,
    periodic_rate,
    periods_per_year,
    total_payments,
)


def get_forecast_summary(series: Sequence) -> ForecastSummary:
    """
    Starting/ending/min/max balance of any balance-bearing series.

    Works for forecast data points and payoff schedule items alike. An empty
    series summarizes to zeros.
    """
    if not series:
        return ForecastSummary(
            starting_balance=0.0,
            ending_balance=0.0,
            min_balance=0.0,
            max_balance=0.0,
            goes_negative=False,
        )

    balances = [point.balance for point in series]
    min_balance = min(balances)

    return ForecastSummary(
        starting_balance=balances[0],
        ending_balance=balances[-1],
        min_balance=min_balance,
        max_balance=max(balances),
        goes_negative=min_balance < 0,
    )


def summarize_payoff(account: Account, projection: PayoffProjection) -> PayoffSummary:
    """
    Headline figures for a payoff timeline.

    Original balance is the one the projector seeded its history with.
    remaining_payments is the closed-form payment count from the account terms,
    a cross-check on the simulated projected_payment_count.
    """
    schedule = projection.payoff_schedule
    current_balance = abs(account.current_balance or 0)
    original_balance = projection.original_balance

    percent_paid = 0.0
    if original_balance > 0:
        percent_paid = round((original_balance - current_balance) / original_balance * 100, 2)

    last = schedule[-1] if schedule else None
    projected_payoff_date = None
    if projection.status == ProjectionStatus.PAID_OFF and last is not None and last.is_projected:
        projected_payoff_date = last.date

    ear = None
    if account.interest_rate is not None:
        ear = effective_annual_rate(
            account.interest_rate,
            account.is_canadian_mortgage,
            account.is_variable_rate,
        )

    remaining_payments = None
    if can_project(account):
        rate = periodic_rate(
            account.interest_rate,
            periods_per_year(account.payment_frequency),
            account.is_canadian_mortgage,
            account.is_variable_rate,
        )
        remaining_payments = total_payments(current_balance, rate, float(account.payment_amount))

    return PayoffSummary(
        original_balance=round(original_balance, 2),
        current_balance=round(current_balance, 2),
        percent_paid=percent_paid,
        total_principal=last.cumulative_principal if last else 0.0,
        total_interest=last.cumulative_interest if last else 0.0,
        historical_payment_count=projection.historical_payment_count,
        projected_payoff_date=projected_payoff_date,
        effective_annual_rate=ear,
        projected_payment_count=projection.projected_payment_count,
        remaining_payments=remaining_payments,
    )
