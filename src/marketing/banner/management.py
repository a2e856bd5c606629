"""Banner management: create, update and delete."""

from sqlalchemy.orm import Session

from marketing.banner.banner import Banner
from marketing.banner.repository import BannerRepository
from shared.logging import get_logger

logger = get_logger(__name__)


def create_banner(session: Session, **data) -> Banner:
    banner = Banner.create(**data)
    BannerRepository(session).add(banner)

    logger.info("banner_created", banner_id=banner.id, position=banner.position)
    return banner


def update_banner(session: Session, banner_id: int, **fields) -> Banner:
    banner = BannerRepository(session).get(banner_id)
    banner.update(**fields)
    session.flush()

    logger.info("banner_updated", banner_id=banner.id)
    return banner


def delete_banner(session: Session, banner_id: int) -> None:
    repo = BannerRepository(session)
    repo.delete(repo.get(banner_id))
    logger.info("banner_deleted", banner_id=banner_id)
