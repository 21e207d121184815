"""Domain models - pure Python dataclasses representing ledger entities and projection output"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional


class AccountType(str, Enum):
    CHEQUING = "CHEQUING"
    SAVINGS = "SAVINGS"
    CREDIT_CARD = "CREDIT_CARD"
    LOAN = "LOAN"
    MORTGAGE = "MORTGAGE"
    LINE_OF_CREDIT = "LINE_OF_CREDIT"
    INVESTMENT = "INVESTMENT"
    CASH = "CASH"
    ASSET = "ASSET"
    OTHER = "OTHER"


DEBT_ACCOUNT_TYPES = frozenset(
    {AccountType.LOAN, AccountType.MORTGAGE, AccountType.LINE_OF_CREDIT}
)


class PaymentFrequency(str, Enum):
    """Repayment cadence of a debt account"""

    WEEKLY = "WEEKLY"
    ACCELERATED_WEEKLY = "ACCELERATED_WEEKLY"
    BIWEEKLY = "BIWEEKLY"
    ACCELERATED_BIWEEKLY = "ACCELERATED_BIWEEKLY"
    SEMI_MONTHLY = "SEMI_MONTHLY"  # 1st and 15th
    MONTHLY = "MONTHLY"
    QUARTERLY = "QUARTERLY"
    YEARLY = "YEARLY"


class ScheduleFrequency(str, Enum):
    """Cadence of a scheduled (recurring) transaction"""

    ONCE = "ONCE"
    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    BIWEEKLY = "BIWEEKLY"
    SEMIMONTHLY = "SEMIMONTHLY"  # 15th and last day of month
    MONTHLY = "MONTHLY"
    QUARTERLY = "QUARTERLY"
    YEARLY = "YEARLY"


class ForecastPeriod(str, Enum):
    WEEK = "week"
    MONTH = "month"
    NINETY_DAYS = "90days"
    SIX_MONTHS = "6months"
    YEAR = "year"


class ProjectionStatus(str, Enum):
    """Why the debt projection stopped where it did"""

    NOT_PROJECTABLE = "not_projectable"  # missing terms or nothing owing
    PAID_OFF = "paid_off"
    NON_AMORTIZING = "non_amortizing"  # payment does not cover interest
    ITERATION_CAP = "iteration_cap"


@dataclass
class Account:
    """Ledger account, consumed read-only"""

    id: str
    type: str
    current_balance: float
    opening_balance: float = 0.0
    name: str = ""
    interest_rate: Optional[float] = None  # annual percentage, e.g. 4.0
    payment_amount: Optional[float] = None
    payment_frequency: Optional[str] = None
    is_canadian_mortgage: bool = False
    is_variable_rate: bool = False
    is_closed: bool = False

    @property
    def is_debt(self) -> bool:
        return self.type in DEBT_ACCOUNT_TYPES


@dataclass
class Split:
    """One leg of a split parent transaction"""

    amount: float
    transfer_account_id: Optional[str] = None


@dataclass
class LinkedTransaction:
    """Parent transaction on the paying side of a transfer"""

    id: str
    splits: List[Split] = field(default_factory=list)


@dataclass
class Transaction:
    """Posted transaction on a single account"""

    account_id: str
    transaction_date: date
    amount: float  # positive = inflow (a payment, for a debt account)
    id: Optional[str] = None
    linked_transaction: Optional[LinkedTransaction] = None


@dataclass
class ScheduleOverride:
    """Amount override for the next due occurrence"""

    amount: Optional[float] = None


@dataclass
class ScheduledTransaction:
    """Recurring transaction template"""

    id: str
    account_id: str
    name: str
    amount: float
    frequency: str
    next_due_date: date
    is_active: bool = True
    end_date: Optional[date] = None
    occurrences_remaining: Optional[int] = None
    next_override: Optional[ScheduleOverride] = None
    is_transfer: bool = False
    transfer_account_id: Optional[str] = None
    is_split: bool = False
    splits: List[Split] = field(default_factory=list)


@dataclass
class FutureTransaction:
    """Already-posted transaction dated after today"""

    id: str
    account_id: str
    name: str
    amount: float
    date: date


@dataclass(frozen=True)
class ForecastTransaction:
    """Transaction contributing to a forecast data point"""

    name: str
    amount: float
    scheduled_transaction_id: Optional[str] = None


@dataclass
class ForecastDataPoint:
    """Running balance after applying one bucket of forecast activity"""

    date: date
    label: str
    balance: float
    transactions: List[ForecastTransaction] = field(default_factory=list)
    is_projected: bool = True
    historical_balance: Optional[float] = None
    projected_balance: Optional[float] = None


@dataclass
class PayoffScheduleItem:
    """One step (or monthly bucket) of a debt payoff timeline"""

    date: date
    label: str
    balance: float
    principal_paid: float
    interest_paid: float
    cumulative_principal: float
    cumulative_interest: float
    is_projected: bool
    historical_balance: Optional[float] = None
    projected_balance: Optional[float] = None


@dataclass
class PayoffProjection:
    """Output of the debt amortization projector"""

    payoff_schedule: List[PayoffScheduleItem]
    projection_start_label: Optional[str]
    status: ProjectionStatus
    original_balance: float = 0.0
    historical_payment_count: int = 0
    projected_payment_count: int = 0


@dataclass(frozen=True)
class ForecastSummary:
    starting_balance: float
    ending_balance: float
    min_balance: float
    max_balance: float
    goes_negative: bool


@dataclass(frozen=True)
class PayoffSummary:
    """Headline figures for a debt payoff timeline"""

    original_balance: float
    current_balance: float
    percent_paid: float
    total_principal: float
    total_interest: float
    historical_payment_count: int
    projected_payoff_date: Optional[date]
    effective_annual_rate: Optional[float]
    projected_payment_count: int = 0
    remaining_payments: Optional[int] = None  # closed-form count from the loan terms
