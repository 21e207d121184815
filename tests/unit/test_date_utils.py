"""Unit tests for calendar helpers"""

from datetime import date
from ledger_outlook.utils.date_utils import (
    add_months,
    day_label,
    end_of_month,
    generate_date_range,
    month_label,
)


def test_generate_date_range_inclusive():
    days = generate_date_range(date(2024, 12, 30), date(2025, 1, 2))
    assert days == [date(2024, 12, 30), date(2024, 12, 31), date(2025, 1, 1), date(2025, 1, 2)]


def test_add_months_clamps():
    assert add_months(date(2025, 1, 31), 1) == date(2025, 2, 28)
    assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
    assert add_months(date(2025, 11, 30), 3) == date(2026, 2, 28)


def test_end_of_month():
    assert end_of_month(date(2025, 2, 3)) == date(2025, 2, 28)
    assert end_of_month(date(2024, 2, 3)) == date(2024, 2, 29)
    assert end_of_month(date(2025, 12, 31)) == date(2025, 12, 31)


def test_labels():
    assert month_label(date(2024, 6, 1)) == "Jun 2024"
    assert day_label(date(2025, 1, 5)) == "Jan 5"
