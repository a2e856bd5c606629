"""Tests for the FlashDeal, Banner and Campaign models."""

from datetime import datetime, timedelta

import pytest
from marketing.banner.banner import Banner
from marketing.campaign.campaign import Campaign
from marketing.flash_deal.flash_deal import FlashDeal
from protean.exceptions import ValidationError

START = datetime(2026, 11, 11)
END = START + timedelta(days=1)


class TestFlashDeal:
    def test_create(self):
        deal = FlashDeal.create(product_id=1, start_date=START, end_date=END, total_stock=100)

        assert deal.sold_count == 0
        assert deal.remaining == 100

    def test_end_before_start_is_rejected(self):
        with pytest.raises(ValidationError) as exc:
            FlashDeal.create(product_id=1, start_date=END, end_date=START, total_stock=100)
        assert "end_date" in exc.value.messages

    def test_negative_total_stock_is_rejected(self):
        with pytest.raises(ValidationError):
            FlashDeal.create(product_id=1, start_date=START, end_date=END, total_stock=-1)

    def test_sold_count_may_exceed_total_stock(self):
        deal = FlashDeal.create(product_id=1, start_date=START, end_date=END, total_stock=10, sold_count=9)
        deal.record_sale(5)

        assert deal.sold_count == 14
        assert deal.remaining == -4

    def test_is_running(self):
        deal = FlashDeal.create(product_id=1, start_date=START, end_date=END, total_stock=10)

        assert deal.is_running(START)
        assert deal.is_running(END)
        assert not deal.is_running(END + timedelta(seconds=1))

    def test_update_revalidates_window(self):
        deal = FlashDeal.create(product_id=1, start_date=START, end_date=END, total_stock=10)
        with pytest.raises(ValidationError):
            deal.update(end_date=START - timedelta(days=1))


class TestBanner:
    def test_create_defaults(self):
        banner = Banner.create(title="Siêu sale", image_url="https://cdn.example.com/b.jpg")

        assert banner.is_active is True
        assert banner.position == 0
        assert banner.start_date is None

    def test_title_is_required(self):
        with pytest.raises(ValidationError):
            Banner.create(title="", image_url="https://cdn.example.com/b.jpg")

    def test_window_must_be_ordered(self):
        with pytest.raises(ValidationError):
            Banner.create(title="Sale", image_url="x.jpg", start_date=END, end_date=START)

    def test_update_can_clear_window(self):
        banner = Banner.create(title="Sale", image_url="x.jpg", start_date=START, end_date=END)
        banner.update(start_date=None, end_date=None, position=3)

        assert banner.start_date is None
        assert banner.end_date is None
        assert banner.position == 3


class TestCampaign:
    def test_create(self):
        campaign = Campaign.create(name="11.11", type="flash_sale", start_date=START, end_date=END)

        assert campaign.type == "flash_sale"
        assert campaign.is_active is True

    def test_unknown_type(self):
        with pytest.raises(ValueError):
            Campaign.create(name="11.11", type="lottery", start_date=START, end_date=END)

    def test_dates_are_required(self):
        with pytest.raises(ValidationError):
            Campaign.create(name="11.11", type="discount", start_date=None, end_date=END)

    def test_end_before_start(self):
        with pytest.raises(ValidationError):
            Campaign.create(name="11.11", type="discount", start_date=END, end_date=START)

    def test_is_running_requires_activation(self):
        campaign = Campaign.create(name="11.11", type="voucher", start_date=START, end_date=END, is_active=False)

        assert not campaign.is_running(START + timedelta(hours=1))
        campaign.update(is_active=True)
        assert campaign.is_running(START + timedelta(hours=1))
