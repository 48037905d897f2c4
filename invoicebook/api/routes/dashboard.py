"""Dashboard API Routes"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from invoicebook.api.error import ClientError
from invoicebook.app.use_cases.invoicing import DashboardResponseDTO, GetDashboard
from invoicebook.app.workspace import Workspace
from invoicebook.depends import get_workspace

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("", response_model=DashboardResponseDTO, response_model_by_alias=False)
async def get_dashboard(
    request: Request,
    reference_date: Optional[date] = Query(
        default=None,
        description="Date the month comparisons are made against (defaults to today)"
    ),
    workspace: Workspace = Depends(get_workspace),
):
    """
    Dashboard figures, recomputed on every call.

    Revenue counts paid invoices only; pending counts sent and pending ones.
    Growth compares this month's paid revenue with last month's.
    """
    recent_limit = request.app.state.config.RECENT_INVOICE_LIMIT
    result = await GetDashboard(workspace, recent_limit=recent_limit).execute(reference_date)

    if result.is_err():
        raise ClientError(result.error)

    return result.value
