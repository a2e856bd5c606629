from __future__ import annotations

from datetime import datetime

from sqlalchemy import or_, select

from marketing.banner.banner import Banner
from shared.repository import Repository


class BannerRepository(Repository[Banner]):
    model = Banner
    label = "Banner"

    def list(self, is_active: bool | None = None, now: datetime | None = None) -> list[Banner]:
        """Banners by position.

        ``is_active=True`` returns only banners being displayed at ``now``:
        active, and inside their display window when one is set.
        """
        stmt = select(Banner)
        if is_active is True:
            stmt = stmt.where(Banner.is_active.is_(True))
            if now is not None:
                stmt = stmt.where(
                    or_(Banner.start_date.is_(None), Banner.start_date <= now),
                    or_(Banner.end_date.is_(None), Banner.end_date >= now),
                )
        elif is_active is False:
            stmt = stmt.where(Banner.is_active.is_(False))
        return list(self.session.scalars(stmt.order_by(Banner.position, Banner.id)))
