"""Back-office order endpoints."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ordering.api.schemas import (
    AdminOrderListResponse,
    AdminOrderResponse,
    OrderStatsResponse,
    OrderStatusName,
    RecentOrderResponse,
    UpdateOrderStatusRequest,
)
from ordering.order.repository import OrderRepository
from ordering.order.status import update_order_status
from reporting.dashboard import recent_orders
from reporting.sales import order_stats
from shared.database import get_session
from shared.schemas import PaginationSchema

admin_order_router = APIRouter(prefix="/orders", tags=["admin: orders"])


@admin_order_router.get("", response_model=AdminOrderListResponse)
def list_orders(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    status: OrderStatusName | None = None,
    search: str | None = None,
    sort_by: str = Query("createdAt", alias="sortBy"),
    sort_order: str = Query("desc", alias="sortOrder", pattern="^(asc|desc)$"),
    session: Session = Depends(get_session),
) -> AdminOrderListResponse:
    repo = OrderRepository(session)
    result = repo.list(status=status, search=search, sort_by=sort_by, sort_order=sort_order, page=page, limit=limit)
    return AdminOrderListResponse(
        orders=[AdminOrderResponse.model_validate(o) for o in result.items],
        pagination=PaginationSchema.from_page(result),
        status_counts=repo.status_counts(),
    )


# Static paths are registered before /{order_id}


@admin_order_router.get("/recent", response_model=list[RecentOrderResponse])
def latest_orders(
    limit: int = Query(5, ge=1, le=50), session: Session = Depends(get_session)
) -> list[RecentOrderResponse]:
    return [RecentOrderResponse(**row) for row in recent_orders(session, limit=limit)]


@admin_order_router.get("/stats", response_model=OrderStatsResponse)
def get_order_stats(
    year: int | None = Query(None, ge=1970, le=9999), session: Session = Depends(get_session)
) -> OrderStatsResponse:
    return OrderStatsResponse(**order_stats(session, year=year))


@admin_order_router.get("/{order_id}", response_model=AdminOrderResponse)
def get_order(order_id: int, session: Session = Depends(get_session)) -> AdminOrderResponse:
    return AdminOrderResponse.model_validate(OrderRepository(session).get_detailed(order_id))


@admin_order_router.put("/{order_id}/status", response_model=AdminOrderResponse)
def change_order_status(
    order_id: int, body: UpdateOrderStatusRequest, session: Session = Depends(get_session)
) -> AdminOrderResponse:
    return AdminOrderResponse.model_validate(update_order_status(session, order_id, body.status))
