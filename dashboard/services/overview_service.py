"""
==============================================================================
Overview Service Module
==============================================================================

Chart-ready data for the dashboard overview page.

Sales Grouping:
--------------
    daily    →  "Jan 5"
    weekly   →  "Week 2"   N = ceil((days since Jan 1 + weekday of Jan 1 + 1) / 7),
                           weekday counted from Sunday = 0
    monthly  →  "January"
    yearly   →  "2024"

Only orders that are paid and not rejected count as sales. Periods are
ordered by the earliest order that falls in them.

==============================================================================
"""

from __future__ import annotations

import logging
import math
from datetime import date, datetime
from typing import Dict, List, Optional, Sequence, Tuple, Union

from sqlalchemy import func
from sqlalchemy.orm import Session

from dashboard.config import get_settings
from dashboard.catalog.models import ProductRecord
from dashboard.db.models import Order, Product
from dashboard.schemas.overview import (
    CategorySeries,
    OverviewSummary,
    SalesSeries,
    Timeframe,
)
from dashboard.services.order_service import OrderService


# Module logger
logger = logging.getLogger(__name__)


CATEGORY_COLORS = (
    "rgba(255, 99, 132, 0.8)",
    "rgba(54, 162, 235, 0.8)",
    "rgba(255, 206, 86, 0.8)",
    "rgba(75, 192, 192, 0.8)",
    "rgba(153, 102, 255, 0.8)",
    "rgba(255, 159, 64, 0.8)",
)


def week_number(day: Union[date, datetime]) -> int:
    """Week of the year, with week 1 ending on the first Saturday."""
    if isinstance(day, datetime):
        day = day.date()

    start_of_year = date(day.year, 1, 1)
    days = (day - start_of_year).days
    # date.weekday() is Monday = 0; shift to Sunday = 0
    start_weekday = (start_of_year.weekday() + 1) % 7

    return math.ceil((days + start_weekday + 1) / 7)


def period_label(moment: datetime, timeframe: Union[Timeframe, str]) -> str:
    """Chart label of the period containing `moment`."""
    timeframe = Timeframe(timeframe)

    if timeframe is Timeframe.DAILY:
        return f"{moment.strftime('%b')} {moment.day}"
    if timeframe is Timeframe.WEEKLY:
        return f"Week {week_number(moment)}"
    if timeframe is Timeframe.MONTHLY:
        return moment.strftime("%B")
    return str(moment.year)


def group_sales(
    sales: Sequence[Tuple[Optional[datetime], float]],
    timeframe: Union[Timeframe, str]
) -> Tuple[List[str], List[float]]:
    """
    Sum sale amounts per period.

    Args:
        sales: (ordered_at, amount) pairs; undated sales are skipped
        timeframe: Grouping period

    Returns:
        Tuple of (labels, totals) in chronological order
    """
    totals: Dict[str, float] = {}
    first_seen: Dict[str, datetime] = {}

    for moment, amount in sales:
        if moment is None:
            continue

        label = period_label(moment, timeframe)
        totals[label] = totals.get(label, 0.0) + (amount or 0.0)
        if label not in first_seen or moment < first_seen[label]:
            first_seen[label] = moment

    labels = sorted(totals, key=lambda label: first_seen[label])
    return labels, [totals[label] for label in labels]


def count_categories(products: Sequence[ProductRecord]) -> Tuple[List[str], List[int]]:
    """Product counts per category, in first-seen order."""
    counts: Dict[str, int] = {}

    for product in products:
        key = product.category.value
        counts[key] = counts.get(key, 0) + 1

    return list(counts), list(counts.values())


class OverviewService:
    """
    Aggregates orders and products into chart series.

    Example:
        >>> service = OverviewService(db)
        >>> service.sales_series(Timeframe.MONTHLY).labels
        ['January', 'February']
    """

    def __init__(self, db: Session) -> None:
        self._db = db
        self._currency = get_settings().default_currency

    def _paid_sales(self) -> List[Tuple[Optional[datetime], float]]:
        return self._db.query(Order.ordered_at, Order.amount).filter(
            Order.paid.is_(True),
            Order.rejected.is_(False),
        ).all()

    def _catalog(self) -> List[ProductRecord]:
        products = self._db.query(Product).order_by(
            Product.created_on.asc(), Product.id.asc()
        ).all()
        return [ProductRecord.model_validate(product) for product in products]

    def sales_series(self, timeframe: Union[Timeframe, str] = Timeframe.DAILY) -> SalesSeries:
        timeframe = Timeframe(timeframe)
        labels, data = group_sales(self._paid_sales(), timeframe)

        logger.debug(f"Sales series ({timeframe}): {len(labels)} periods")

        return SalesSeries(
            timeframe=timeframe,
            currency=self._currency,
            labels=labels,
            data=data,
        )

    def category_series(self) -> CategorySeries:
        labels, data = count_categories(self._catalog())

        return CategorySeries(
            labels=labels,
            data=data,
            background_colors=list(CATEGORY_COLORS[:len(labels)]),
        )

    def summary(self) -> OverviewSummary:
        """Headline totals for the overview cards."""
        products_total = self._db.query(func.count(Product.id)).scalar() or 0
        products_visible = self._db.query(func.count(Product.id)).filter(
            Product.show.is_(True)
        ).scalar() or 0
        out_of_stock = self._db.query(func.count(Product.id)).filter(
            Product.stock_quantity <= 0
        ).scalar() or 0

        revenue = sum(amount or 0.0 for _, amount in self._paid_sales())

        return OverviewSummary(
            products_total=products_total,
            products_visible=products_visible,
            products_out_of_stock=out_of_stock,
            revenue=revenue,
            currency=self._currency,
            orders=OrderService(self._db).count_by_tab(),
        )
