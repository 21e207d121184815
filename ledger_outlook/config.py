"""Configuration management using Pydantic Settings"""

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "ledger-outlook"
    log_level: str = "INFO"

    # Debt payoff projection
    max_projected_payments: int = 600
    max_chart_points: int = 60
    balance_epsilon: float = 0.01  # balances at or below this count as paid off

    # Cash-flow forecast
    forecast_excluded_account_types: List[str] = ["INVESTMENT"]


settings = Settings()
