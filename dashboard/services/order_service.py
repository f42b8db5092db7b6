"""
==============================================================================
Order Service Module
==============================================================================

Incoming customer orders: tabbed listing and status flags.

Tabs:
----
    processing  →  not rejected, not paid
    completed   →  not rejected, paid
    rejected    →  rejected
    all         →  every order

==============================================================================
"""

from __future__ import annotations

import logging
from typing import List, Union

from sqlalchemy.orm import Session, selectinload

from dashboard.core import exceptions
from dashboard.core.context import OperatorContext
from dashboard.db.models import Order, OrderFlag, OrderTab
from dashboard.schemas.order import OrderStatusUpdate


# Module logger
logger = logging.getLogger(__name__)


class OrderService:
    """
    Order listing and status updates.

    Example:
        >>> service = OrderService(db)
        >>> service.list_orders(OrderTab.PROCESSING)
        >>> service.toggle(actor, order_id, OrderFlag.PAID)
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    def list_orders(self, tab: Union[OrderTab, str] = OrderTab.ALL) -> List[Order]:
        """
        Orders under a tab, newest first. Undated orders come last.
        """
        tab = OrderTab(tab)
        query = self._db.query(Order).options(selectinload(Order.items))

        if tab is OrderTab.PROCESSING:
            query = query.filter(Order.rejected.is_(False), Order.paid.is_(False))
        elif tab is OrderTab.COMPLETED:
            query = query.filter(Order.rejected.is_(False), Order.paid.is_(True))
        elif tab is OrderTab.REJECTED:
            query = query.filter(Order.rejected.is_(True))

        return query.order_by(
            Order.ordered_at.is_(None),
            Order.ordered_at.desc(),
            Order.id.asc(),
        ).all()

    def count_by_tab(self) -> dict:
        """Number of orders under each tab."""
        orders = self._db.query(Order.paid, Order.rejected).all()
        counts = {tab.value: 0 for tab in OrderTab}

        for paid, rejected in orders:
            if rejected:
                counts[OrderTab.REJECTED.value] += 1
            elif paid:
                counts[OrderTab.COMPLETED.value] += 1
            else:
                counts[OrderTab.PROCESSING.value] += 1
        counts[OrderTab.ALL.value] = len(orders)

        return counts

    def get_order(self, order_id: str) -> Order:
        """
        Raises:
            AppException: ORDER_NOT_FOUND if absent
        """
        order = self._db.query(Order).options(
            selectinload(Order.items)
        ).filter(Order.id == order_id).first()

        if not order:
            raise exceptions.order_not_found(order_id)

        return order

    def update_status(
        self,
        actor: OperatorContext,
        order_id: str,
        updates: OrderStatusUpdate
    ) -> Order:
        """
        Apply a partial update of the order flags.

        Raises:
            AppException: EMPTY_STATUS_UPDATE if no flag was supplied
            AppException: ORDER_NOT_FOUND if absent
        """
        changes = updates.model_dump(exclude_none=True)
        if not changes:
            raise exceptions.empty_status_update()

        order = self.get_order(order_id)

        for field, value in changes.items():
            setattr(order, field, value)

        self._db.commit()
        self._db.refresh(order)

        logger.info(f"📦 Order {order.order_ref} updated {changes} by {actor}")
        return order

    def toggle(
        self,
        actor: OperatorContext,
        order_id: str,
        flag: Union[OrderFlag, str]
    ) -> Order:
        """Flip a single order flag."""
        flag = OrderFlag(flag)
        order = self.get_order(order_id)

        current = getattr(order, flag.value)
        return self.update_status(
            actor, order_id, OrderStatusUpdate(**{flag.value: not current})
        )
