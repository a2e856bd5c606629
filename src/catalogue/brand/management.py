"""Brand management: create, update and delete."""

from protean.exceptions import ValidationError
from sqlalchemy.orm import Session

from catalogue.brand.brand import Brand
from catalogue.brand.repository import BrandRepository
from shared.logging import get_logger

logger = get_logger(__name__)


def create_brand(session: Session, name, logo_url=None, is_featured=False) -> Brand:
    brand = Brand.create(name=name, logo_url=logo_url, is_featured=is_featured)
    BrandRepository(session).add(brand)

    logger.info("brand_created", brand_id=brand.id)
    return brand


def update_brand(session: Session, brand_id: int, **fields) -> Brand:
    brand = BrandRepository(session).get(brand_id)
    brand.update(**fields)
    session.flush()

    logger.info("brand_updated", brand_id=brand.id)
    return brand


def delete_brand(session: Session, brand_id: int) -> None:
    repo = BrandRepository(session)
    brand = repo.get(brand_id)

    if repo.product_count(brand.id):
        raise ValidationError(
            {
                "brand": [
                    "Cannot delete brand with associated products. "
                    "Remove products first or reassign them to another brand."
                ]
            }
        )

    repo.delete(brand)
    logger.info("brand_deleted", brand_id=brand_id)
