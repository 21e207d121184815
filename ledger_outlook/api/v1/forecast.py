"""POST /v1/forecast - Cash-flow forecast endpoint"""

import logging
import time
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request

from ledger_outlook.api.dependencies import get_request_id, get_settings
from ledger_outlook.api.v1.schemas import (
    ForecastDataPointSchema,
    ForecastPeriodSchema,
    ForecastRequest,
    ForecastResponse,
    ForecastSummarySchema,
)
from ledger_outlook.config import Settings
from ledger_outlook.domain.exceptions import AccountNotFoundError, UnknownForecastPeriodError
from ledger_outlook.domain.forecast import (
    ALL_ACCOUNTS,
    FORECAST_PERIOD_DAYS,
    FORECAST_PERIOD_LABELS,
    build_forecast,
    require_account,
)
from ledger_outlook.domain.summary import get_forecast_summary
from ledger_outlook.infrastructure.observability.logging import log_projection
from ledger_outlook.infrastructure.observability.metrics import record_projection

router = APIRouter()


@router.get("/forecast/periods", response_model=List[ForecastPeriodSchema])
def list_forecast_periods():
    """Supported forecast horizons with their length and chart label"""
    return [
        ForecastPeriodSchema(period=period.value, days=days, label=FORECAST_PERIOD_LABELS[period])
        for period, days in FORECAST_PERIOD_DAYS.items()
    ]


@router.post("/forecast", response_model=ForecastResponse)
def create_forecast(
    request_body: ForecastRequest,
    request: Request,
    engine_settings: Settings = Depends(get_settings),
):
    """
    Project balances over the selected period.

    Flow:
    1. Validate the account filter against the supplied accounts
    2. Drop balance-irrelevant account types from the all-accounts aggregate
    3. Expand scheduled transactions and accumulate running balances
    4. Summarize the series
    """
    start_time = time.perf_counter()
    request_id = get_request_id(request)

    accounts = [a.to_domain() for a in request_body.accounts]

    try:
        require_account(accounts, request_body.account_id)

        if request_body.account_id == ALL_ACCOUNTS:
            excluded = set(engine_settings.forecast_excluded_account_types)
            accounts = [a for a in accounts if a.type not in excluded]

        data_points = build_forecast(
            accounts,
            [t.to_domain() for t in request_body.scheduled_transactions],
            request_body.period,
            account_id=request_body.account_id,
            future_transactions=[t.to_domain() for t in request_body.future_transactions],
            today=request_body.today,
        )
        summary = get_forecast_summary(data_points)

    except AccountNotFoundError as e:
        logging.warning(f"Forecast for unknown account: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=404, detail=str(e))

    except UnknownForecastPeriodError as e:
        logging.warning(f"Invalid forecast period: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    if not data_points:
        outcome = "empty"
    elif summary.goes_negative:
        outcome = "goes_negative"
    else:
        outcome = "stays_positive"

    duration = time.perf_counter() - start_time
    record_projection("forecast", outcome, len(data_points), duration)
    log_projection(request_id, "forecast", request_body.account_id, outcome, len(data_points), duration * 1000)

    return ForecastResponse(
        period=request_body.period,
        account_id=request_body.account_id,
        data_points=[ForecastDataPointSchema.model_validate(p) for p in data_points],
        summary=ForecastSummarySchema.model_validate(summary),
    )
