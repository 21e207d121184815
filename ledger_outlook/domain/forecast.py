"""Cash-flow forecaster - near-term balances from recurring scheduled transactions"""

from collections import defaultdict
from datetime import date, timedelta
from itertools import count
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from ledger_outlook.domain.exceptions import AccountNotFoundError, UnknownForecastPeriodError
from ledger_outlook.domain.models import (
    Account,
    ForecastDataPoint,
    ForecastPeriod,
    ForecastTransaction,
    FutureTransaction,
    ScheduledTransaction,
    ScheduleFrequency,
)
from ledger_outlook.domain.series import stitch_display_series
from ledger_outlook.utils.date_utils import add_months, day_label, end_of_month, generate_date_range

ALL_ACCOUNTS = "all"

FORECAST_PERIOD_DAYS: Dict[ForecastPeriod, int] = {
    ForecastPeriod.WEEK: 7,
    ForecastPeriod.MONTH: 30,
    ForecastPeriod.NINETY_DAYS: 90,
    ForecastPeriod.SIX_MONTHS: 180,
    ForecastPeriod.YEAR: 365,
}

FORECAST_PERIOD_LABELS: Dict[ForecastPeriod, str] = {
    ForecastPeriod.WEEK: "7D",
    ForecastPeriod.MONTH: "30D",
    ForecastPeriod.NINETY_DAYS: "90D",
    ForecastPeriod.SIX_MONTHS: "6M",
    ForecastPeriod.YEAR: "1Y",
}

# Days between emitted data points, to keep long horizons chartable
_GRANULARITY_DAYS: Dict[ForecastPeriod, int] = {
    ForecastPeriod.WEEK: 1,
    ForecastPeriod.MONTH: 1,
    ForecastPeriod.NINETY_DAYS: 3,
    ForecastPeriod.SIX_MONTHS: 7,
    ForecastPeriod.YEAR: 7,
}

_DAY_STEPS = {
    ScheduleFrequency.DAILY: 1,
    ScheduleFrequency.WEEKLY: 7,
    ScheduleFrequency.BIWEEKLY: 14,
}

_MONTH_STEPS = {
    ScheduleFrequency.MONTHLY: 1,
    ScheduleFrequency.QUARTERLY: 3,
    ScheduleFrequency.YEARLY: 12,
}

MAX_OCCURRENCE_ITERATIONS = 1000


def resolve_period(period: str) -> ForecastPeriod:
    """
    Normalize a period selector ('month' or ForecastPeriod.MONTH) to the enum.

    Raises:
        UnknownForecastPeriodError: period is not a supported horizon
    """
    try:
        return ForecastPeriod(period)
    except ValueError:
        raise UnknownForecastPeriodError(f"Unknown forecast period: {period!r}")


def forecast_horizon(period: str, today: date) -> Tuple[int, date]:
    """
    Number of days and end date covered by a forecast period.

    Raises:
        UnknownForecastPeriodError: period is not one of FORECAST_PERIOD_DAYS
    """
    days = FORECAST_PERIOD_DAYS[resolve_period(period)]
    return days, today + timedelta(days=days)


def _semimonthly_next(current: date) -> date:
    """On or before the 15th -> end of this month, otherwise -> 15th of next month"""
    if current.day <= 15:
        return end_of_month(current)
    return add_months(current.replace(day=15), 1)


def schedule_dates(anchor: date, frequency: str) -> Iterator[date]:
    """
    Endless sequence of occurrence dates starting at anchor.

    Month-based cadences are computed from the anchor rather than stepped, so a
    schedule on the 31st lands on each month's last day without drifting.
    """
    if frequency == ScheduleFrequency.ONCE:
        yield anchor
    elif frequency == ScheduleFrequency.SEMIMONTHLY:
        current = anchor
        while True:
            yield current
            current = _semimonthly_next(current)
    elif frequency in _DAY_STEPS:
        step = timedelta(days=_DAY_STEPS[frequency])
        for k in count():
            yield anchor + step * k
    else:
        months = _MONTH_STEPS.get(frequency, 1)
        for k in count():
            yield add_months(anchor, months * k)


def generate_occurrences(
    transaction: ScheduledTransaction,
    start_date: date,
    end_date: date,
) -> List[Tuple[date, float]]:
    """
    Occurrence dates and amounts of a scheduled transaction within [start_date, end_date].

    Rules:
    - Inactive templates produce nothing
    - Occurrences stop after the template's end date
    - occurrences_remaining counts down only for occurrences inside the window
      and does not apply to ONCE templates
    - An override amount applies to the next due occurrence only

    Returns:
        List of (date, amount) tuples in date order
    """
    if not transaction.is_active:
        return []

    base_amount = float(transaction.amount)
    next_due_amount = base_amount
    if transaction.next_override is not None and transaction.next_override.amount is not None:
        next_due_amount = float(transaction.next_override.amount)

    remaining = transaction.occurrences_remaining
    if transaction.frequency == ScheduleFrequency.ONCE:
        remaining = None
    occurrences = []

    dates = schedule_dates(transaction.next_due_date, transaction.frequency)
    for _, occurrence_date in zip(range(MAX_OCCURRENCE_ITERATIONS), dates):
        if occurrence_date > end_date:
            break
        if transaction.end_date is not None and occurrence_date > transaction.end_date:
            break
        if remaining is not None and remaining <= 0:
            break

        if occurrence_date >= start_date:
            amount = next_due_amount if occurrence_date == transaction.next_due_date else base_amount
            occurrences.append((occurrence_date, amount))
            if remaining is not None:
                remaining -= 1

    return occurrences


def is_transfer(transaction: ScheduledTransaction) -> bool:
    """Transfers move money between two ledger accounts and net to zero across all accounts"""
    if transaction.is_transfer and transaction.transfer_account_id:
        return True
    return transaction.is_split and any(
        split.transfer_account_id is not None for split in transaction.splits
    )


def select_accounts(accounts: Sequence[Account], account_id: str) -> List[Account]:
    """Accounts covered by the forecast filter; 'all' means every open account"""
    if account_id == ALL_ACCOUNTS:
        return [a for a in accounts if not a.is_closed]
    return [a for a in accounts if a.id == account_id]


def require_account(accounts: Sequence[Account], account_id: str) -> None:
    """
    Check that a forecast filter names a supplied account.

    Raises:
        AccountNotFoundError: account_id is neither 'all' nor a supplied account
    """
    if account_id != ALL_ACCOUNTS and not any(a.id == account_id for a in accounts):
        raise AccountNotFoundError(f"Account {account_id} not found")


def build_forecast(
    accounts: Sequence[Account],
    scheduled_transactions: Sequence[ScheduledTransaction],
    period: str,
    account_id: str = ALL_ACCOUNTS,
    future_transactions: Optional[Sequence[FutureTransaction]] = None,
    today: Optional[date] = None,
) -> List[ForecastDataPoint]:
    """
    Main entry point: projected running balance over a forecast period.

    Flow:
    1. Resolve the horizon and the accounts covered by account_id
    2. Start from the summed current balance of those accounts
    3. Expand scheduled transactions and known future transactions into dated
       occurrences within the horizon
    4. Walk day by day, applying each day's net amount to the running balance
    5. Emit a data point every granularity step, on any day with activity,
       and on the last day

    In 'all' mode balances are summed across accounts and transfers are
    skipped since they net to zero. No matching accounts gives an empty series.

    Raises:
        UnknownForecastPeriodError: period is not a supported horizon
    """
    if today is None:
        today = date.today()

    days, end_date = forecast_horizon(period, today)
    granularity = _GRANULARITY_DAYS[resolve_period(period)]

    target_accounts = select_accounts(accounts, account_id)
    if not target_accounts:
        return []
    target_ids = {a.id for a in target_accounts}

    transactions_by_date: Dict[date, List[ForecastTransaction]] = defaultdict(list)

    starting_balance = sum(float(a.current_balance) for a in target_accounts)

    for ft in future_transactions or []:
        if ft.account_id in target_ids and today <= ft.date <= end_date:
            transactions_by_date[ft.date].append(
                ForecastTransaction(name=ft.name, amount=float(ft.amount))
            )

    for tx in scheduled_transactions:
        if not tx.is_active or tx.account_id not in target_ids:
            continue
        if account_id == ALL_ACCOUNTS and is_transfer(tx):
            continue

        for occurrence_date, amount in generate_occurrences(tx, today, end_date):
            transactions_by_date[occurrence_date].append(
                ForecastTransaction(name=tx.name, amount=amount, scheduled_transaction_id=tx.id)
            )

    data_points: List[ForecastDataPoint] = []
    balance = starting_balance
    last_added: Optional[date] = None

    for current in generate_date_range(today, end_date):
        day_transactions = transactions_by_date.get(current, [])
        for tx in day_transactions:
            balance += tx.amount

        due = last_added is None or (current - last_added).days >= granularity
        if due or day_transactions or current == end_date:
            data_points.append(
                ForecastDataPoint(
                    date=current,
                    label=day_label(current),
                    balance=round(balance, 2),
                    transactions=list(day_transactions),
                    is_projected=current != today,
                )
            )
            last_added = current

    return stitch_display_series(data_points)
