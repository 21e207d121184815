"""Debt amortization projector - payoff timeline from payment history plus loan terms"""

from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Sequence, Set, Tuple

from ledger_outlook.domain.models import (
    Account,
    PayoffProjection,
    PayoffScheduleItem,
    ProjectionStatus,
    Transaction,
)
from ledger_outlook.domain.rates import advance_date, periodic_rate, periods_per_year
from ledger_outlook.domain.series import (
    MAX_CHART_POINTS,
    bucket_by_month,
    downsample_series,
    projection_start_label,
    stitch_display_series,
)
from ledger_outlook.utils.date_utils import month_label

MAX_PROJECTED_PAYMENTS = 600
BALANCE_EPSILON = 0.01


@dataclass
class HistoricalLedger:
    """Principal/interest reconstructed from posted payments"""

    items: List[PayoffScheduleItem]
    original_balance: float
    cumulative_principal: float
    cumulative_interest: float


def original_balance(account: Account, payments: Sequence[Transaction]) -> float:
    """
    Starting balance of the debt.

    A non-zero opening balance is taken as authoritative. Otherwise the balance
    is reconstructed as |current balance| + everything paid so far.
    """
    opening = abs(account.opening_balance or 0)
    if opening > 0:
        return opening
    return abs(account.current_balance or 0) + sum(abs(t.amount) for t in payments)


def _interest_leg(transaction: Transaction, account_id: str, seen_parent_ids: Set[str]) -> float:
    """
    Interest portion of a payment, read from the paying parent's splits.

    A parent is attributed once only; the interest leg is the split that does
    not transfer into this account. Missing or ambiguous split data yields 0.
    """
    linked = transaction.linked_transaction
    if linked is None or not linked.splits:
        return 0.0
    if linked.id in seen_parent_ids:
        return 0.0
    seen_parent_ids.add(linked.id)

    for split in linked.splits:
        if split.transfer_account_id != account_id:
            return abs(split.amount or 0)
    return 0.0


def build_historical_ledger(account: Account, transactions: Sequence[Transaction]) -> HistoricalLedger:
    """Replay posted payments (positive amounts) in date order against the original balance"""
    payments = sorted(
        (t for t in transactions if t.amount > 0),
        key=lambda t: t.transaction_date,
    )

    starting_balance = original_balance(account, payments)
    running_balance = starting_balance
    cumulative_principal = 0.0
    cumulative_interest = 0.0
    seen_parent_ids: Set[str] = set()

    items = []
    for txn in payments:
        principal = abs(txn.amount)
        interest = _interest_leg(txn, account.id, seen_parent_ids)

        running_balance = max(0.0, running_balance - principal)
        cumulative_principal += principal
        cumulative_interest += interest

        items.append(
            PayoffScheduleItem(
                date=txn.transaction_date,
                label=month_label(txn.transaction_date),
                balance=round(running_balance, 2),
                principal_paid=principal,
                interest_paid=round(interest, 2),
                cumulative_principal=round(cumulative_principal, 2),
                cumulative_interest=round(cumulative_interest, 2),
                is_projected=False,
            )
        )

    return HistoricalLedger(
        items=items,
        original_balance=starting_balance,
        cumulative_principal=cumulative_principal,
        cumulative_interest=cumulative_interest,
    )


def can_project(account: Account, balance_epsilon: float = BALANCE_EPSILON) -> bool:
    """Terms are complete and something is still owing"""
    return (
        abs(account.current_balance or 0) > balance_epsilon
        and account.interest_rate is not None
        and bool(account.payment_amount)
        and account.payment_amount > 0
        and bool(account.payment_frequency)
    )


def project_future_payments(
    account: Account,
    start_date: date,
    cumulative_principal: float = 0.0,
    cumulative_interest: float = 0.0,
    max_payments: int = MAX_PROJECTED_PAYMENTS,
    balance_epsilon: float = BALANCE_EPSILON,
) -> Tuple[List[PayoffScheduleItem], ProjectionStatus]:
    """
    Simulate scheduled payments from start_date until payoff.

    Each step advances one payment period, charges interest on the remaining
    balance and applies the rest of the payment to principal. Stops when:
    - the balance is at or below balance_epsilon (PAID_OFF)
    - the payment no longer covers the interest charge (NON_AMORTIZING)
    - max_payments steps have been simulated (ITERATION_CAP)

    Returns:
        (projected items, status)
    """
    if not can_project(account, balance_epsilon):
        return [], ProjectionStatus.NOT_PROJECTABLE

    frequency = account.payment_frequency
    rate = periodic_rate(
        account.interest_rate,
        periods_per_year(frequency),
        account.is_canadian_mortgage,
        account.is_variable_rate,
    )
    payment = float(account.payment_amount)

    balance = abs(account.current_balance)
    projection_date = start_date
    items: List[PayoffScheduleItem] = []

    while balance > balance_epsilon:
        if len(items) >= max_payments:
            return items, ProjectionStatus.ITERATION_CAP

        projection_date = advance_date(projection_date, frequency)
        interest_charge = balance * rate
        principal_portion = payment - interest_charge

        if principal_portion <= 0:
            return items, ProjectionStatus.NON_AMORTIZING

        # Final payment only covers what is left
        principal_portion = min(principal_portion, balance)

        balance = max(0.0, balance - principal_portion)
        cumulative_principal += principal_portion
        cumulative_interest += interest_charge

        items.append(
            PayoffScheduleItem(
                date=projection_date,
                label=month_label(projection_date),
                balance=round(balance, 2),
                principal_paid=round(principal_portion, 2),
                interest_paid=round(interest_charge, 2),
                cumulative_principal=round(cumulative_principal, 2),
                cumulative_interest=round(cumulative_interest, 2),
                is_projected=True,
            )
        )

    return items, ProjectionStatus.PAID_OFF


def project_debt_payoff(
    account: Account,
    transactions: Sequence[Transaction],
    today: Optional[date] = None,
    max_payments: int = MAX_PROJECTED_PAYMENTS,
    max_points: int = MAX_CHART_POINTS,
    balance_epsilon: float = BALANCE_EPSILON,
) -> PayoffProjection:
    """
    Main entry point: historical payoff ledger stitched to a projection until payoff.

    Flow:
    1. Replay posted payments to reconstruct principal/interest paid to date
    2. Project future payments from today if the account terms allow it
    3. Merge both in date order and aggregate into monthly buckets
    4. Downsample to at most max_points (+ the final point)
    5. Split balances into historical/projected display series

    Never raises for incomplete terms or odd payment data; a projection that
    cannot proceed is reported through the returned status.
    """
    if today is None:
        today = date.today()

    history = build_historical_ledger(account, transactions)
    projected, status = project_future_payments(
        account,
        start_date=today,
        cumulative_principal=history.cumulative_principal,
        cumulative_interest=history.cumulative_interest,
        max_payments=max_payments,
        balance_epsilon=balance_epsilon,
    )

    combined = sorted(history.items + projected, key=lambda item: item.date)
    buckets = bucket_by_month(combined)
    buckets = stitch_display_series(downsample_series(buckets, max_points))

    return PayoffProjection(
        payoff_schedule=buckets,
        projection_start_label=projection_start_label(buckets),
        status=status,
        original_balance=round(history.original_balance, 2),
        historical_payment_count=len(history.items),
        projected_payment_count=len(projected),
    )
