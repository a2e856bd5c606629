from __future__ import annotations

from datetime import datetime

from sqlalchemy import select

from marketing.campaign.campaign import Campaign
from shared.repository import Repository


class CampaignRepository(Repository[Campaign]):
    model = Campaign
    label = "Campaign"

    def list(self, type: str | None = None, status: str | None = None, search: str | None = None) -> list[Campaign]:
        stmt = select(Campaign)
        if type:
            stmt = stmt.where(Campaign.type == type)
        if status == "active":
            stmt = stmt.where(Campaign.is_active.is_(True))
        elif status == "inactive":
            stmt = stmt.where(Campaign.is_active.is_(False))
        if search:
            stmt = stmt.where(Campaign.name.ilike(f"%{search}%"))
        return list(self.session.scalars(stmt.order_by(Campaign.start_date.desc(), Campaign.id.desc())))

    def active(self, now: datetime) -> list[Campaign]:
        stmt = (
            select(Campaign)
            .where(Campaign.is_active.is_(True), Campaign.start_date <= now, Campaign.end_date >= now)
            .order_by(Campaign.start_date.desc(), Campaign.id.desc())
        )
        return list(self.session.scalars(stmt))
