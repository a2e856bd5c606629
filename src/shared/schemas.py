"""Pydantic building blocks shared by every API package."""

from datetime import UTC, datetime
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from shared.pagination import Page


def _to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is not None:
        value = value.astimezone(UTC).replace(tzinfo=None)
    return value


# Timestamps are stored as naive UTC; offsets on input are converted, naive input is taken as UTC
UtcDatetime = Annotated[datetime, AfterValidator(_to_naive_utc)]


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire.

    Reads ORM objects directly (``from_attributes``) and accepts either
    spelling on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PaginationSchema(CamelModel):
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int

    @classmethod
    def from_page(cls, page: Page) -> "PaginationSchema":
        return cls(
            current_page=page.page,
            total_pages=page.total_pages,
            total_items=page.total,
            items_per_page=page.limit,
        )


class StatusResponse(CamelModel):
    success: bool = True
    message: str | None = None
