"""Date manipulation utilities"""

import calendar
from datetime import date, timedelta
from typing import List

from dateutil.relativedelta import relativedelta


def generate_date_range(start: date, end: date) -> List[date]:
    """Generate list of dates from start to end (inclusive)"""
    days = (end - start).days + 1
    return [start + timedelta(days=i) for i in range(days)]


def add_months(from_date: date, months: int) -> date:
    """Add calendar months, clamping to the last day of the target month (Jan 31 -> Feb 28)"""
    return from_date + relativedelta(months=months)


def end_of_month(from_date: date) -> date:
    """Last calendar day of the month containing from_date"""
    last_day = calendar.monthrange(from_date.year, from_date.month)[1]
    return from_date.replace(day=last_day)


def month_label(d: date) -> str:
    """Month bucket label, e.g. 'Jun 2024'"""
    return d.strftime("%b %Y")


def day_label(d: date) -> str:
    """Short day label, e.g. 'Jan 15'"""
    return f"{d:%b} {d.day}"
