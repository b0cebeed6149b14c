"""Pydantic models for order status updates."""

from pydantic import BaseModel, ConfigDict, Field

from storeadmin.domain.entities import OrderStatus


class OrderStatusUpdate(BaseModel):
    """Request body for ``POST /orders/status``."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    order_id: str = Field(..., min_length=1)
    new_status: OrderStatus
    user_id: str | None = None
    customer_email: str | None = None


__all__ = ["OrderStatusUpdate"]
