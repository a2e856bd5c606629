"""Pydantic request/response schemas for the Identity API."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import Field

from shared.schemas import CamelModel

# --- Request Schemas ---


class RegisterRequest(CamelModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "username": "lan.nguyen",
                    "password": "s3cret-pass",
                    "fullName": "Nguyen Thi Lan",
                    "email": "lan@example.com",
                    "phone": "0901234567",
                    "address": "12 Le Loi, District 1",
                }
            ]
        }
    }

    username: str = Field(..., min_length=3, max_length=100)
    password: str = Field(..., min_length=6, max_length=72)
    full_name: str | None = Field(None, max_length=255)
    email: str | None = Field(None, max_length=254)
    phone: str | None = Field(None, max_length=30)
    address: str | None = None


class LoginRequest(CamelModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UpdateUserRequest(CamelModel):
    username: str | None = Field(None, min_length=3, max_length=100)
    email: str | None = Field(None, max_length=254)
    full_name: str | None = Field(None, max_length=255)
    role: Literal["user", "admin"] | None = None
    is_active: bool | None = None
    phone: str | None = Field(None, max_length=30)
    address: str | None = None


# --- Response Schemas ---


class UserResponse(CamelModel):
    id: int
    username: str
    full_name: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    role: str
    is_active: bool
    created_at: datetime | None = None


class UserStats(CamelModel):
    total_orders: int = 0
    total_spent: float = 0.0


class UserDetailResponse(UserResponse):
    updated_at: datetime | None = None
    stats: UserStats


class UserPagination(CamelModel):
    page: int
    limit: int
    total: int
    total_pages: int


class UserListResponse(CamelModel):
    users: list[UserResponse]
    pagination: UserPagination
