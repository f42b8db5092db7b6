"""
==============================================================================
Overview Endpoints
==============================================================================

Chart data for the dashboard overview page.

==============================================================================
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from dashboard.db.database import get_db
from dashboard.core.context import OperatorContext
from dashboard.core.dependencies import get_operator_context
from dashboard.services.overview_service import OverviewService
from dashboard.schemas.overview import (
    CategorySeries,
    OverviewSummary,
    SalesSeries,
    Timeframe,
)


router = APIRouter(prefix="/overview", tags=["Overview"])


@router.get("/sales", response_model=SalesSeries)
async def sales_series(
    timeframe: Timeframe = Query(Timeframe.DAILY),
    actor: OperatorContext = Depends(get_operator_context),
    db: Session = Depends(get_db)
):
    """Completed sales grouped by day, week, month or year."""
    return OverviewService(db).sales_series(timeframe)


@router.get("/categories", response_model=CategorySeries)
async def category_series(
    actor: OperatorContext = Depends(get_operator_context),
    db: Session = Depends(get_db)
):
    """Product counts per category."""
    return OverviewService(db).category_series()


@router.get("/summary", response_model=OverviewSummary)
async def summary(
    actor: OperatorContext = Depends(get_operator_context),
    db: Session = Depends(get_db)
):
    """Headline totals for products, revenue and orders."""
    return OverviewService(db).summary()
