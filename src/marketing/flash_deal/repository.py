from __future__ import annotations

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.orm import joinedload

from marketing.flash_deal.flash_deal import FlashDeal
from shared.repository import Repository


class FlashDealRepository(Repository[FlashDeal]):
    model = FlashDeal
    label = "Flash deal"

    def active(self, now: datetime) -> list[FlashDeal]:
        """Deals whose window contains ``now``, ending soonest first."""
        stmt = (
            select(FlashDeal)
            .options(joinedload(FlashDeal.product))
            .where(FlashDeal.start_date <= now, FlashDeal.end_date >= now)
            .order_by(FlashDeal.end_date, FlashDeal.id)
        )
        return list(self.session.scalars(stmt))

    def list(self) -> list[FlashDeal]:
        stmt = select(FlashDeal).options(joinedload(FlashDeal.product)).order_by(FlashDeal.start_date.desc())
        return list(self.session.scalars(stmt))
