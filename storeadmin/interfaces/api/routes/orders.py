"""Endpoints for admin order status changes."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storeadmin.application.use_cases import update_order_status
from storeadmin.interfaces.api.dependencies import get_db
from storeadmin.interfaces.api.routes_helpers import to_response
from storeadmin.interfaces.api.schemas import OperationResponse, OrderStatusUpdate

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("/status", response_model=OperationResponse)
def change_order_status(
    payload: OrderStatusUpdate,
    db: Session = Depends(get_db),
) -> OperationResponse:
    """Update an order's status and clear its pending admin alerts."""

    return to_response(
        update_order_status(
            db,
            order_id=payload.order_id,
            new_status=payload.new_status,
            user_id=payload.user_id,
            customer_email=payload.customer_email,
        )
    )
