"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class AccountNotFoundError(DomainException):
    """Requested account id is not among the supplied accounts"""

    pass


class NotADebtAccountError(DomainException):
    """Payoff projection requested for an account that is not a loan, mortgage or line of credit"""

    pass


class UnknownForecastPeriodError(DomainException):
    """Forecast period selector is not one of the supported horizons"""

    pass
