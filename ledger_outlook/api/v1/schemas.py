"""Pydantic schemas for API request/response validation"""

from datetime import date
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from ledger_outlook.domain.models import (
    Account,
    FutureTransaction,
    LinkedTransaction,
    ScheduledTransaction,
    ScheduleOverride,
    Split,
    Transaction,
)

ForecastPeriodLiteral = Literal["week", "month", "90days", "6months", "year"]


class SplitSchema(BaseModel):
    amount: float
    transfer_account_id: Optional[str] = None

    def to_domain(self) -> Split:
        return Split(amount=self.amount, transfer_account_id=self.transfer_account_id)


class LinkedTransactionSchema(BaseModel):
    """Parent transaction whose splits separate principal from interest"""

    id: str
    splits: List[SplitSchema] = []

    def to_domain(self) -> LinkedTransaction:
        return LinkedTransaction(id=self.id, splits=[s.to_domain() for s in self.splits])


class AccountSchema(BaseModel):
    """Ledger account as supplied by the caller"""

    id: str = Field(..., min_length=1)
    type: str = Field(..., description="CHEQUING, SAVINGS, LOAN, MORTGAGE, LINE_OF_CREDIT, ...")
    name: str = ""
    current_balance: float
    opening_balance: float = 0.0
    interest_rate: Optional[float] = Field(None, ge=0, description="Annual percentage, e.g. 4.0")
    payment_amount: Optional[float] = None
    payment_frequency: Optional[str] = None
    is_canadian_mortgage: bool = False
    is_variable_rate: bool = False
    is_closed: bool = False

    def to_domain(self) -> Account:
        return Account(
            id=self.id,
            type=self.type,
            name=self.name,
            current_balance=self.current_balance,
            opening_balance=self.opening_balance,
            interest_rate=self.interest_rate,
            payment_amount=self.payment_amount,
            payment_frequency=self.payment_frequency,
            is_canadian_mortgage=self.is_canadian_mortgage,
            is_variable_rate=self.is_variable_rate,
            is_closed=self.is_closed,
        )


class TransactionSchema(BaseModel):
    id: Optional[str] = None
    account_id: str
    transaction_date: date
    amount: float = Field(..., description="Positive = payment into the debt account")
    linked_transaction: Optional[LinkedTransactionSchema] = None

    def to_domain(self) -> Transaction:
        return Transaction(
            id=self.id,
            account_id=self.account_id,
            transaction_date=self.transaction_date,
            amount=self.amount,
            linked_transaction=self.linked_transaction.to_domain() if self.linked_transaction else None,
        )


class ScheduledTransactionSchema(BaseModel):
    """Recurring transaction template"""

    id: str
    account_id: str
    name: str
    amount: float
    frequency: Literal["ONCE", "DAILY", "WEEKLY", "BIWEEKLY", "SEMIMONTHLY", "MONTHLY", "QUARTERLY", "YEARLY"]
    next_due_date: date
    is_active: bool = True
    end_date: Optional[date] = None
    occurrences_remaining: Optional[int] = Field(None, ge=0)
    next_override_amount: Optional[float] = None
    is_transfer: bool = False
    transfer_account_id: Optional[str] = None
    is_split: bool = False
    splits: List[SplitSchema] = []

    def to_domain(self) -> ScheduledTransaction:
        override = None
        if self.next_override_amount is not None:
            override = ScheduleOverride(amount=self.next_override_amount)
        return ScheduledTransaction(
            id=self.id,
            account_id=self.account_id,
            name=self.name,
            amount=self.amount,
            frequency=self.frequency,
            next_due_date=self.next_due_date,
            is_active=self.is_active,
            end_date=self.end_date,
            occurrences_remaining=self.occurrences_remaining,
            next_override=override,
            is_transfer=self.is_transfer,
            transfer_account_id=self.transfer_account_id,
            is_split=self.is_split,
            splits=[s.to_domain() for s in self.splits],
        )


class FutureTransactionSchema(BaseModel):
    """Posted transaction dated after today"""

    id: str
    account_id: str
    name: str
    amount: float
    date: date

    def to_domain(self) -> FutureTransaction:
        return FutureTransaction(
            id=self.id,
            account_id=self.account_id,
            name=self.name,
            amount=self.amount,
            date=self.date,
        )


class PayoffRequest(BaseModel):
    """Request body for POST /v1/debt/payoff-schedule"""

    account: AccountSchema
    transactions: List[TransactionSchema] = []
    today: Optional[date] = Field(None, description="Projection start; defaults to the server date")


class ForecastRequest(BaseModel):
    """Request body for POST /v1/forecast"""

    accounts: List[AccountSchema]
    scheduled_transactions: List[ScheduledTransactionSchema] = []
    period: ForecastPeriodLiteral = "month"
    account_id: str = Field("all", description="'all' or a single account id")
    future_transactions: List[FutureTransactionSchema] = []
    today: Optional[date] = None


class PayoffScheduleItemSchema(BaseModel):
    """Single monthly bucket of a payoff timeline"""

    model_config = ConfigDict(from_attributes=True)

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


class ForecastSummarySchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    starting_balance: float
    ending_balance: float
    min_balance: float
    max_balance: float
    goes_negative: bool


class PayoffSummarySchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    original_balance: float
    current_balance: float
    percent_paid: float
    total_principal: float
    total_interest: float
    historical_payment_count: int
    projected_payoff_date: Optional[date] = None
    effective_annual_rate: Optional[float] = None
    projected_payment_count: int = 0
    remaining_payments: Optional[int] = None


class PayoffResponse(BaseModel):
    """Response for POST /v1/debt/payoff-schedule"""

    account_id: str
    status: str
    projection_start_label: Optional[str] = None
    payoff_schedule: List[PayoffScheduleItemSchema]
    summary: ForecastSummarySchema
    payoff_summary: PayoffSummarySchema


class ForecastTransactionSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    amount: float
    scheduled_transaction_id: Optional[str] = None


class ForecastDataPointSchema(BaseModel):
    """Single point of a cash-flow forecast"""

    model_config = ConfigDict(from_attributes=True)

    date: date
    label: str
    balance: float
    transactions: List[ForecastTransactionSchema]
    is_projected: bool
    historical_balance: Optional[float] = None
    projected_balance: Optional[float] = None


class ForecastResponse(BaseModel):
    """Response for POST /v1/forecast"""

    period: str
    account_id: str
    data_points: List[ForecastDataPointSchema]
    summary: ForecastSummarySchema


class ForecastPeriodSchema(BaseModel):
    period: str
    days: int
    label: str
