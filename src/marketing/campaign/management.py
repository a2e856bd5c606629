"""Campaign management: create, update and delete."""

from sqlalchemy.orm import Session

from marketing.campaign.campaign import Campaign
from marketing.campaign.repository import CampaignRepository
from shared.logging import get_logger

logger = get_logger(__name__)


def create_campaign(session: Session, **data) -> Campaign:
    campaign = Campaign.create(**data)
    CampaignRepository(session).add(campaign)

    logger.info("campaign_created", campaign_id=campaign.id, type=campaign.type)
    return campaign


def update_campaign(session: Session, campaign_id: int, **fields) -> Campaign:
    campaign = CampaignRepository(session).get(campaign_id)
    campaign.update(**fields)
    session.flush()

    logger.info("campaign_updated", campaign_id=campaign.id)
    return campaign


def delete_campaign(session: Session, campaign_id: int) -> None:
    repo = CampaignRepository(session)
    repo.delete(repo.get(campaign_id))
    logger.info("campaign_deleted", campaign_id=campaign_id)
