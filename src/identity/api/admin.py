"""Back-office endpoints for managing user accounts."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from identity.api.schemas import (
    UpdateUserRequest,
    UserDetailResponse,
    UserListResponse,
    UserPagination,
    UserResponse,
    UserStats,
)
from identity.user.management import delete_user, update_user
from identity.user.repository import UserRepository
from ordering.order.repository import OrderRepository
from shared.database import get_session
from shared.schemas import StatusResponse

admin_user_router = APIRouter(prefix="/users", tags=["admin: users"])


@admin_user_router.get("", response_model=UserListResponse)
def list_users(
    role: str | None = None,
    search: str | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    session: Session = Depends(get_session),
) -> UserListResponse:
    result = UserRepository(session).list(role=role, search=search, page=page, limit=limit)
    return UserListResponse(
        users=[UserResponse.model_validate(u) for u in result.items],
        pagination=UserPagination(
            page=result.page,
            limit=result.limit,
            total=result.total,
            total_pages=result.total_pages,
        ),
    )


@admin_user_router.get("/{user_id}", response_model=UserDetailResponse)
def get_user(user_id: int, session: Session = Depends(get_session)) -> UserDetailResponse:
    user = UserRepository(session).get(user_id)
    total_orders, total_spent = OrderRepository(session).totals_for_user(user.id)
    return UserDetailResponse(
        **UserResponse.model_validate(user).model_dump(),
        updated_at=user.updated_at,
        stats=UserStats(total_orders=total_orders, total_spent=total_spent),
    )


@admin_user_router.put("/{user_id}", response_model=UserResponse)
def update_user_account(
    user_id: int, body: UpdateUserRequest, session: Session = Depends(get_session)
) -> UserResponse:
    user = update_user(session, user_id, **body.model_dump(exclude_unset=True))
    return UserResponse.model_validate(user)


@admin_user_router.delete("/{user_id}", response_model=StatusResponse)
def delete_user_account(user_id: int, session: Session = Depends(get_session)) -> StatusResponse:
    delete_user(session, user_id)
    return StatusResponse(message="User deleted successfully")
