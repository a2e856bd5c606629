"""Response schemas for the back-office reports."""

from __future__ import annotations

from ordering.api.schemas import AdminOrderResponse
from shared.schemas import CamelModel


class StoreStatsResponse(CamelModel):
    total_sales: float
    total_orders: int
    total_products: int
    total_customers: int
    pending: int = 0
    processing: int = 0
    shipping: int = 0
    delivered: int = 0
    cancelled: int = 0


class SalesTotal(CamelModel):
    name: str
    total: float


class ChartPoint(CamelModel):
    label: str
    value: float


class SalesByPeriodResponse(CamelModel):
    period: str
    data: list[ChartPoint]


class SalesPoint(CamelModel):
    date: str | None = None
    year: int | None = None
    month: int | None = None
    total: float
    count: int


class SalesStatisticsResponse(CamelModel):
    period: str
    data: list[SalesPoint]


class TopProduct(CamelModel):
    id: int
    name: str
    slug: str
    image_url: str
    price: float
    stock: int
    category: str
    total_quantity: int
    total_revenue: float
    average_price: float


class PopularProduct(CamelModel):
    id: int
    name: str
    slug: str
    image_url: str
    price: float
    stock: int
    total_quantity: int
    total_revenue: float


class TopCustomer(CamelModel):
    id: int
    username: str
    full_name: str
    email: str
    phone: str
    order_count: int
    total_spent: float
    avg_order_value: float


class Total(CamelModel):
    total: float


class OrderTotals(CamelModel):
    total: int
    by_status: dict[str, int]


class DashboardStatsResponse(CamelModel):
    sales: Total
    orders: OrderTotals
    customers: Total
    products: Total
    recent_orders: list[AdminOrderResponse]
