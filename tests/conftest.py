"""Pytest fixtures for testing"""

import pytest
from datetime import date
from fastapi.testclient import TestClient
from ledger_outlook.api.main import create_app
from ledger_outlook.domain.models import Account, Split, LinkedTransaction, Transaction


# Fixed "today" so projections are reproducible
TODAY = date(2025, 1, 15)


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client"""
    app = create_app()
    return TestClient(app)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def mortgage_account() -> Account:
    """Canadian fixed-rate mortgage, two thirds of the way from 300k to payoff"""
    return Account(
        id="mtg-1",
        type="MORTGAGE",
        name="Home Mortgage",
        opening_balance=-300000,
        current_balance=-200000,
        interest_rate=4.0,
        is_canadian_mortgage=True,
        payment_amount=1500,
        payment_frequency="MONTHLY",
    )


@pytest.fixture
def mortgage_payment() -> Transaction:
    """One historical payment of 1000 into the mortgage"""
    return Transaction(
        id="txn-1",
        account_id="mtg-1",
        transaction_date=date(2024, 6, 1),
        amount=1000,
    )


@pytest.fixture
def split_payment() -> Transaction:
    """Payment whose chequing-side parent splits 800 principal / 200 interest"""
    return Transaction(
        id="txn-2",
        account_id="loan-1",
        transaction_date=date(2024, 11, 1),
        amount=800,
        linked_transaction=LinkedTransaction(
            id="parent-1",
            splits=[
                Split(amount=-800, transfer_account_id="loan-1"),
                Split(amount=-200, transfer_account_id=None),
            ],
        ),
    )
