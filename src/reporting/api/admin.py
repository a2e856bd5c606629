"""Back-office statistics and dashboard endpoints."""

from typing import Literal

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ordering.api.schemas import AdminOrderResponse
from ordering.order.repository import OrderRepository
from reporting.api.schemas import (
    ChartPoint,
    DashboardStatsResponse,
    OrderTotals,
    PopularProduct,
    SalesByPeriodResponse,
    SalesPoint,
    SalesStatisticsResponse,
    SalesTotal,
    StoreStatsResponse,
    TopCustomer,
    TopProduct,
    Total,
)
from reporting.customers import top_customers
from reporting.dashboard import dashboard_stats, store_totals
from reporting.products import popular_products, top_products
from reporting.sales import monthly_sales, sales_by_period, sales_statistics, yearly_sales
from shared.database import get_session
from shared.schemas import UtcDatetime

admin_report_router = APIRouter(tags=["admin: reports"])


# --- Store statistics ---


@admin_report_router.get("/stats", response_model=StoreStatsResponse)
def get_store_stats(session: Session = Depends(get_session)) -> StoreStatsResponse:
    totals = store_totals(session)
    return StoreStatsResponse(
        total_sales=totals["total_sales"],
        total_orders=totals["total_orders"],
        total_products=totals["total_products"],
        total_customers=totals["total_customers"],
        **totals["orders_by_status"],
    )


@admin_report_router.get("/stats/sales/monthly", response_model=list[SalesTotal])
def get_monthly_sales(
    year: int | None = Query(None, ge=1970, le=9999), session: Session = Depends(get_session)
) -> list[SalesTotal]:
    return [SalesTotal(**row) for row in monthly_sales(session, year)]


@admin_report_router.get("/stats/sales/yearly", response_model=list[SalesTotal])
def get_yearly_sales(session: Session = Depends(get_session)) -> list[SalesTotal]:
    return [SalesTotal(**row) for row in yearly_sales(session)]


@admin_report_router.get(
    "/stats/sales", response_model=SalesStatisticsResponse, response_model_exclude_none=True
)
def get_sales_statistics(
    period: str = "monthly",
    start_date: UtcDatetime | None = Query(None, alias="startDate"),
    end_date: UtcDatetime | None = Query(None, alias="endDate"),
    session: Session = Depends(get_session),
) -> SalesStatisticsResponse:
    result = sales_statistics(session, period=period, start=start_date, end=end_date)
    return SalesStatisticsResponse(period=result["period"], data=[SalesPoint(**row) for row in result["data"]])


@admin_report_router.get("/stats/products", response_model=list[TopProduct])
def get_product_stats(
    sort_by: Literal["revenue", "quantity"] = Query("revenue", alias="sortBy"),
    limit: int = Query(10, ge=1, le=100),
    category: int | None = None,
    start_date: UtcDatetime | None = Query(None, alias="startDate"),
    end_date: UtcDatetime | None = Query(None, alias="endDate"),
    session: Session = Depends(get_session),
) -> list[TopProduct]:
    rows = top_products(
        session, start=start_date, end=end_date, category_id=category, sort_by=sort_by, limit=limit
    )
    return [TopProduct(**row) for row in rows]


@admin_report_router.get("/stats/customers", response_model=list[TopCustomer])
def get_customer_stats(
    period: Literal["daily", "weekly", "monthly", "yearly", "all"] = "monthly",
    sort_by: Literal["orders", "spent", "average"] = Query("orders", alias="sortBy"),
    limit: int = Query(10, ge=1, le=100),
    session: Session = Depends(get_session),
) -> list[TopCustomer]:
    return [TopCustomer(**row) for row in top_customers(session, period=period, sort_by=sort_by, limit=limit)]


# --- Dashboard ---


@admin_report_router.get("/dashboard/stats", response_model=DashboardStatsResponse)
def get_dashboard_stats(session: Session = Depends(get_session)) -> DashboardStatsResponse:
    stats = dashboard_stats(session)
    return DashboardStatsResponse(
        sales=Total(total=stats["total_sales"]),
        orders=OrderTotals(total=stats["total_orders"], by_status=stats["orders_by_status"]),
        customers=Total(total=stats["total_customers"]),
        products=Total(total=stats["total_products"]),
        recent_orders=[AdminOrderResponse.model_validate(o) for o in stats["recent_orders"]],
    )


@admin_report_router.get("/dashboard/sales-by-period", response_model=SalesByPeriodResponse)
def get_sales_by_period(
    period: str = "monthly",
    year: int | None = Query(None, ge=1970, le=9999),
    month: int | None = Query(None, ge=1, le=12),
    session: Session = Depends(get_session),
) -> SalesByPeriodResponse:
    result = sales_by_period(session, period=period, year=year, month=month)
    return SalesByPeriodResponse(period=result["period"], data=[ChartPoint(**row) for row in result["data"]])


@admin_report_router.get("/dashboard/popular-products", response_model=list[PopularProduct])
def get_popular_products(
    limit: int = Query(5, ge=1, le=50), session: Session = Depends(get_session)
) -> list[PopularProduct]:
    return [PopularProduct(**row) for row in popular_products(session, limit=limit)]


@admin_report_router.get("/dashboard/recent-orders", response_model=list[AdminOrderResponse])
def get_recent_orders(
    limit: int = Query(10, ge=1, le=100), session: Session = Depends(get_session)
) -> list[AdminOrderResponse]:
    return [AdminOrderResponse.model_validate(o) for o in OrderRepository(session).recent(limit)]
