"""Pydantic request/response schemas for the Ordering API."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import Field

from catalogue.api.schemas import ProductResponse
from shared.schemas import CamelModel, PaginationSchema

OrderStatusName = Literal["pending", "processing", "shipping", "delivered", "cancelled"]
PaymentMethodName = Literal["cod", "card", "bank_transfer", "e_wallet"]

# --- Request Schemas ---


class CreateCartRequest(CamelModel):
    session_id: str | None = Field(None, max_length=255)


class AddCartItemRequest(CamelModel):
    model_config = {"json_schema_extra": {"examples": [{"cartId": 1, "productId": 42, "quantity": 2}]}}

    cart_id: int
    product_id: int
    quantity: int = Field(1, ge=1)


class UpdateCartItemRequest(CamelModel):
    quantity: int = Field(..., ge=1)


class CheckoutRequest(CamelModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "sessionId": "5f1c0d2e9a7b4c3d8e6f1a2b3c4d5e6f",
                    "shippingName": "Nguyen Van A",
                    "shippingPhone": "0901234567",
                    "shippingAddress": "12 Le Loi, District 1",
                    "shippingCity": "Ho Chi Minh City",
                    "paymentMethod": "cod",
                }
            ]
        }
    }

    session_id: str = Field(..., min_length=1)
    shipping_name: str = Field(..., min_length=1, max_length=255)
    shipping_phone: str = Field(..., min_length=1, max_length=50)
    shipping_address: str = Field(..., min_length=1)
    shipping_city: str | None = Field(None, max_length=100)
    payment_method: PaymentMethodName = "cod"
    note: str | None = None


class UpdateOrderStatusRequest(CamelModel):
    status: OrderStatusName


# --- Response Schemas ---


class CartItemResponse(CamelModel):
    id: int
    cart_id: int
    product_id: int
    quantity: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CartItemWithProductResponse(CartItemResponse):
    product: ProductResponse


class CartResponse(CamelModel):
    id: int
    session_id: str | None = None
    user_id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CartDetailResponse(CartResponse):
    items: list[CartItemWithProductResponse] = []


class AddCartItemResponse(CamelModel):
    item: CartItemResponse
    cart: CartDetailResponse


class OrderItemResponse(CamelModel):
    id: int
    product_id: int
    quantity: int
    price: float
    product: ProductResponse | None = None


class OrderResponse(CamelModel):
    id: int
    display_number: str
    user_id: int | None = None
    status: str
    payment_status: str
    payment_method: str
    shipping_name: str
    shipping_phone: str
    shipping_address: str
    shipping_city: str | None = None
    note: str | None = None
    total_amount: float
    created_at: datetime
    updated_at: datetime


class OrderDetailResponse(OrderResponse):
    items: list[OrderItemResponse] = []


class OrderCustomer(CamelModel):
    id: int
    username: str
    full_name: str | None = None
    email: str | None = None
    phone: str | None = None


class AdminOrderResponse(OrderDetailResponse):
    user: OrderCustomer | None = None


class AdminOrderListResponse(CamelModel):
    orders: list[AdminOrderResponse]
    pagination: PaginationSchema
    status_counts: dict[str, int]


class MonthlyRevenue(CamelModel):
    name: str
    total: float


class OrderStatsResponse(CamelModel):
    total_orders: int
    status_counts: dict[str, int]
    total_revenue: float
    monthly_revenue: list[MonthlyRevenue]


class RecentOrderResponse(CamelModel):
    id: str
    customer: str
    date: str
    status: str
    total: float
