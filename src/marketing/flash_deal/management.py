"""Flash deal management: create, update, delete and sold-count increments."""

from protean.exceptions import ValidationError
from sqlalchemy.orm import Session

from catalogue.product.product import Product
from marketing.flash_deal.flash_deal import FlashDeal
from marketing.flash_deal.repository import FlashDealRepository
from shared.logging import get_logger

logger = get_logger(__name__)


def _check_product(session: Session, product_id) -> None:
    if product_id is not None and session.get(Product, product_id) is None:
        raise ValidationError({"product_id": ["Product not found"]})


def create_flash_deal(session: Session, product_id, start_date, end_date, total_stock, sold_count=0) -> FlashDeal:
    _check_product(session, product_id)

    deal = FlashDeal.create(
        product_id=product_id,
        start_date=start_date,
        end_date=end_date,
        total_stock=total_stock,
        sold_count=sold_count,
    )
    FlashDealRepository(session).add(deal)

    logger.info("flash_deal_created", flash_deal_id=deal.id, product_id=product_id)
    return deal


def update_flash_deal(session: Session, flash_deal_id: int, **fields) -> FlashDeal:
    deal = FlashDealRepository(session).get(flash_deal_id)
    _check_product(session, fields.get("product_id"))

    deal.update(**fields)
    session.flush()

    logger.info("flash_deal_updated", flash_deal_id=deal.id)
    return deal


def delete_flash_deal(session: Session, flash_deal_id: int) -> None:
    repo = FlashDealRepository(session)
    repo.delete(repo.get(flash_deal_id))
    logger.info("flash_deal_deleted", flash_deal_id=flash_deal_id)


def increment_sold_count(session: Session, flash_deal_id: int, increment: int) -> FlashDeal:
    deal = FlashDealRepository(session).get(flash_deal_id)
    deal.record_sale(increment)
    session.flush()

    if deal.sold_count > deal.total_stock:
        logger.warning(
            "flash_deal_oversold",
            flash_deal_id=deal.id,
            sold_count=deal.sold_count,
            total_stock=deal.total_stock,
        )
    return deal
