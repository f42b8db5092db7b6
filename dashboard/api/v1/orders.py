"""
==============================================================================
Order Endpoints
==============================================================================

Tabbed order listing and status flag updates.

==============================================================================
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from dashboard.db.database import get_db
from dashboard.db.models import OrderFlag, OrderTab
from dashboard.core.context import OperatorContext
from dashboard.core.dependencies import get_operator_context
from dashboard.services.order_service import OrderService
from dashboard.schemas.order import (
    OrderDetail,
    OrderListResponse,
    OrderResponse,
    OrderStatusUpdate,
)


router = APIRouter(prefix="/orders", tags=["Orders"])


class OrderController:
    """Controller for order operations."""

    def __init__(self, db: Session):
        self._service = OrderService(db)

    def list_orders(self, tab: OrderTab) -> OrderListResponse:
        orders = self._service.list_orders(tab)
        return OrderListResponse(
            tab=tab,
            total=len(orders),
            orders=[OrderDetail.model_validate(order) for order in orders]
        )

    def get_order(self, order_id: str) -> OrderResponse:
        order = self._service.get_order(order_id)
        return OrderResponse(order=OrderDetail.model_validate(order))

    def update_status(
        self,
        actor: OperatorContext,
        order_id: str,
        updates: OrderStatusUpdate
    ) -> OrderResponse:
        order = self._service.update_status(actor, order_id, updates)
        return OrderResponse(order=OrderDetail.model_validate(order))

    def toggle(self, actor: OperatorContext, order_id: str, flag: OrderFlag) -> OrderResponse:
        order = self._service.toggle(actor, order_id, flag)
        return OrderResponse(order=OrderDetail.model_validate(order))


@router.get("", response_model=OrderListResponse)
async def list_orders(
    tab: OrderTab = Query(OrderTab.PROCESSING),
    actor: OperatorContext = Depends(get_operator_context),
    db: Session = Depends(get_db)
):
    """List orders under a tab, newest first."""
    controller = OrderController(db)
    return controller.list_orders(tab)


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: str,
    actor: OperatorContext = Depends(get_operator_context),
    db: Session = Depends(get_db)
):
    """Get a single order with its items."""
    controller = OrderController(db)
    return controller.get_order(order_id)


@router.patch("/{order_id}", response_model=OrderResponse)
async def update_order_status(
    order_id: str,
    updates: OrderStatusUpdate,
    actor: OperatorContext = Depends(get_operator_context),
    db: Session = Depends(get_db)
):
    """Set one or more of accepted / paid / rejected / served."""
    controller = OrderController(db)
    return controller.update_status(actor, order_id, updates)


@router.post("/{order_id}/toggle/{flag}", response_model=OrderResponse)
async def toggle_order_flag(
    order_id: str,
    flag: OrderFlag,
    actor: OperatorContext = Depends(get_operator_context),
    db: Session = Depends(get_db)
):
    """Flip a single order flag."""
    controller = OrderController(db)
    return controller.toggle(actor, order_id, flag)
