"""POST /v1/debt/payoff-schedule - Debt payoff timeline endpoint"""

import logging
import time

from fastapi import APIRouter, Depends, HTTPException, Request

from ledger_outlook.api.dependencies import get_request_id, get_settings
from ledger_outlook.api.v1.schemas import (
    ForecastSummarySchema,
    PayoffRequest,
    PayoffResponse,
    PayoffScheduleItemSchema,
    PayoffSummarySchema,
)
from ledger_outlook.config import Settings
from ledger_outlook.domain.amortization import project_debt_payoff
from ledger_outlook.domain.exceptions import NotADebtAccountError
from ledger_outlook.domain.summary import get_forecast_summary, summarize_payoff
from ledger_outlook.infrastructure.observability.logging import log_projection
from ledger_outlook.infrastructure.observability.metrics import record_projection

router = APIRouter()


@router.post("/debt/payoff-schedule", response_model=PayoffResponse)
def create_payoff_schedule(
    request_body: PayoffRequest,
    request: Request,
    engine_settings: Settings = Depends(get_settings),
):
    """
    Build the payoff timeline for one debt account.

    Flow:
    1. Keep only the transactions posted to the requested account
    2. Replay payment history and project to payoff
    3. Summarize the series for the summary cards

    A projection that cannot proceed (missing terms, payment below interest)
    is still a 200 response; the status field says why it stopped.
    """
    start_time = time.perf_counter()
    request_id = get_request_id(request)
    account = request_body.account.to_domain()

    try:
        if not account.is_debt:
            raise NotADebtAccountError(
                f"Account {account.id} has type {account.type}; payoff needs a loan, mortgage or line of credit"
            )

        transactions = [
            t.to_domain() for t in request_body.transactions if t.account_id == account.id
        ]
        projection = project_debt_payoff(
            account,
            transactions,
            today=request_body.today,
            max_payments=engine_settings.max_projected_payments,
            max_points=engine_settings.max_chart_points,
            balance_epsilon=engine_settings.balance_epsilon,
        )
        summary = get_forecast_summary(projection.payoff_schedule)
        payoff_summary = summarize_payoff(account, projection)

    except NotADebtAccountError as e:
        logging.warning(f"Rejected payoff request: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration = time.perf_counter() - start_time
    points = len(projection.payoff_schedule)
    record_projection("payoff", projection.status.value, points, duration)
    log_projection(request_id, "payoff", account.id, projection.status.value, points, duration * 1000)

    return PayoffResponse(
        account_id=account.id,
        status=projection.status.value,
        projection_start_label=projection.projection_start_label,
        payoff_schedule=[
            PayoffScheduleItemSchema.model_validate(item) for item in projection.payoff_schedule
        ],
        summary=ForecastSummarySchema.model_validate(summary),
        payoff_summary=PayoffSummarySchema.model_validate(payoff_summary),
    )
