from datetime import datetime

import pytest
from protean.exceptions import ValidationError
from reporting.sales import (
    monthly_sales,
    order_stats,
    sales_by_period,
    sales_statistics,
    total_revenue,
    yearly_sales,
)


@pytest.fixture
def sales(session, make_product, make_order):
    """Orders of 100 each; only shipping/delivered ones are revenue."""
    product = make_product(session, price=100.0)

    def _order(created_at, status="delivered", quantity=1):
        return make_order(session, [(product, quantity)], status=status, created_at=created_at)

    _order(datetime(2022, 7, 1))
    _order(datetime(2024, 1, 31, 23, 59))
    _order(datetime(2024, 3, 1, 0, 0))
    _order(datetime(2024, 3, 9, 12, 0), status="shipping", quantity=2)
    _order(datetime(2024, 3, 9, 18, 0), status="pending")
    _order(datetime(2024, 3, 10, 9, 0), status="cancelled")
    _order(datetime(2024, 3, 10, 9, 0), status="processing")
    return product


class TestTotals:
    def test_total_revenue_counts_revenue_statuses_only(self, session, sales):
        assert total_revenue(session) == 500.0

    def test_no_orders(self, session):
        assert total_revenue(session) == 0.0

    def test_order_stats(self, session, sales):
        stats = order_stats(session, year=2024)

        assert stats["total_orders"] == 7
        assert stats["total_revenue"] == 500.0
        assert stats["status_counts"] == {
            "pending": 1,
            "processing": 1,
            "shipping": 1,
            "delivered": 3,
            "cancelled": 1,
        }
        assert len(stats["monthly_revenue"]) == 12


class TestMonthlyAndYearly:
    def test_monthly_sales_are_zero_filled(self, session, sales):
        rows = monthly_sales(session, 2024)

        assert [row["name"] for row in rows] == [
            "Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"
        ]
        assert [row["total"] for row in rows] == [100.0, 0.0, 300.0] + [0.0] * 9

    def test_year_without_orders(self, session, sales):
        assert all(row["total"] == 0.0 for row in monthly_sales(session, 2019))

    def test_yearly_sales_fill_gaps(self, session, sales):
        assert yearly_sales(session) == [
            {"name": "2022", "total": 100.0},
            {"name": "2023", "total": 0.0},
            {"name": "2024", "total": 400.0},
        ]

    def test_yearly_sales_without_revenue(self, session):
        assert yearly_sales(session) == []


class TestSalesByPeriod:
    NOW = datetime(2024, 3, 20, 10, 0)

    def test_daily_covers_every_day_of_the_month(self, session, sales):
        result = sales_by_period(session, "daily", now=self.NOW)

        assert result["period"] == "daily"
        assert len(result["data"]) == 31
        assert result["data"][0] == {"label": "1", "value": 100.0}
        assert result["data"][8] == {"label": "9", "value": 200.0}
        assert result["data"][9] == {"label": "10", "value": 0.0}

    def test_daily_for_explicit_month(self, session, sales):
        result = sales_by_period(session, "daily", year=2024, month=2, now=self.NOW)

        assert len(result["data"]) == 29
        assert sum(point["value"] for point in result["data"]) == 0.0

    def test_invalid_month(self, session):
        with pytest.raises(ValidationError):
            sales_by_period(session, "daily", year=2024, month=13, now=self.NOW)

    def test_monthly(self, session, sales):
        result = sales_by_period(session, "monthly", year=2024, now=self.NOW)

        assert [point["label"] for point in result["data"]][:3] == ["Jan", "Feb", "Mar"]
        assert [point["value"] for point in result["data"]][:4] == [100.0, 0.0, 300.0, 0.0]

    def test_yearly_covers_last_five_years(self, session, sales):
        result = sales_by_period(session, "yearly", now=self.NOW)

        assert result["data"] == [
            {"label": "2020", "value": 0.0},
            {"label": "2021", "value": 0.0},
            {"label": "2022", "value": 100.0},
            {"label": "2023", "value": 0.0},
            {"label": "2024", "value": 400.0},
        ]

    def test_invalid_period(self, session):
        with pytest.raises(ValidationError) as exc:
            sales_by_period(session, "hourly")

        assert "period" in exc.value.messages


class TestSalesStatistics:
    NOW = datetime(2024, 3, 20, 10, 0)

    def test_daily_includes_both_end_days(self, session, sales):
        result = sales_statistics(
            session, "daily", start=datetime(2024, 3, 9, 15, 0), end=datetime(2024, 3, 10, 1, 0), now=self.NOW
        )

        assert result["data"] == [
            {"date": "2024-03-09", "total": 200.0, "count": 1},
            {"date": "2024-03-10", "total": 0.0, "count": 0},
        ]

    def test_monthly_defaults_to_year_to_date(self, session, sales):
        result = sales_statistics(session, "monthly", now=self.NOW)

        assert result["data"] == [
            {"year": 2024, "month": 1, "total": 100.0, "count": 1},
            {"year": 2024, "month": 2, "total": 0.0, "count": 0},
            {"year": 2024, "month": 3, "total": 300.0, "count": 2},
        ]

    def test_yearly(self, session, sales):
        result = sales_statistics(
            session, "yearly", start=datetime(2022, 1, 1), end=datetime(2024, 12, 31), now=self.NOW
        )

        assert result["data"] == [
            {"year": 2022, "total": 100.0, "count": 1},
            {"year": 2023, "total": 0.0, "count": 0},
            {"year": 2024, "total": 400.0, "count": 3},
        ]

    def test_end_before_start(self, session):
        with pytest.raises(ValidationError) as exc:
            sales_statistics(session, "daily", start=datetime(2024, 3, 10), end=datetime(2024, 3, 9))

        assert exc.value.messages == {"endDate": ["End date must not be before start date"]}

    def test_invalid_period(self, session):
        with pytest.raises(ValidationError):
            sales_statistics(session, "weekly")
