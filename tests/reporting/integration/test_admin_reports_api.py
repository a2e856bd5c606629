from datetime import datetime

import pytest


@pytest.fixture
def store(persisted, make_category, make_product, make_order, customer):
    phones = persisted(make_category, name="Phones")
    phone = persisted(make_product, name="Phone", price=1000.0, category_id=phones.id)
    case = persisted(make_product, name="Case", price=50.0)
    persisted(make_order, [(phone, 1)], user=customer, status="delivered", created_at=datetime(2024, 1, 15))
    persisted(make_order, [(case, 4)], user=customer, status="shipping", created_at=datetime(2024, 3, 9, 12))
    persisted(make_order, [(phone, 2)], status="pending", created_at=datetime(2024, 3, 10))
    persisted(make_order, [(case, 1)], status="cancelled", created_at=datetime(2023, 6, 1))
    return {"phone": phone, "case": case, "phones": phones}


class TestReportAccess:
    @pytest.mark.parametrize(
        "path",
        ["/api/admin/stats", "/api/admin/stats/sales", "/api/admin/dashboard/stats", "/api/admin/stats/customers"],
    )
    def test_admin_only(self, client, customer_client, path):
        assert client.get(path).status_code == 401
        assert customer_client.get(path).status_code == 403


class TestStoreStats:
    def test_flat_totals(self, admin_client, store):
        response = admin_client.get("/api/admin/stats")

        assert response.status_code == 200
        assert response.json() == {
            "totalSales": 1200.0,
            "totalOrders": 4,
            "totalProducts": 2,
            "totalCustomers": 1,
            "pending": 1,
            "processing": 0,
            "shipping": 1,
            "delivered": 1,
            "cancelled": 1,
        }

    def test_monthly_sales(self, admin_client, store):
        rows = admin_client.get("/api/admin/stats/sales/monthly", params={"year": 2024}).json()

        assert len(rows) == 12
        assert rows[0] == {"name": "Jan", "total": 1000.0}
        assert rows[2] == {"name": "Mar", "total": 200.0}

    def test_yearly_sales(self, admin_client, store):
        rows = admin_client.get("/api/admin/stats/sales/yearly").json()
        assert rows == [{"name": "2024", "total": 1200.0}]


class TestSalesStatistics:
    def test_daily_rows(self, admin_client, store):
        response = admin_client.get(
            "/api/admin/stats/sales",
            params={"period": "daily", "startDate": "2024-03-09T00:00:00", "endDate": "2024-03-10T00:00:00"},
        )

        assert response.status_code == 200
        assert response.json() == {
            "period": "daily",
            "data": [
                {"date": "2024-03-09", "total": 200.0, "count": 1},
                {"date": "2024-03-10", "total": 0.0, "count": 0},
            ],
        }

    def test_offsets_are_converted_to_utc(self, admin_client, store):
        # 07:00 on the 10th in Vietnam is midnight UTC on the 10th
        response = admin_client.get(
            "/api/admin/stats/sales",
            params={
                "period": "daily",
                "startDate": "2024-03-10T07:00:00+07:00",
                "endDate": "2024-03-10T08:00:00+07:00",
            },
        )

        assert [row["date"] for row in response.json()["data"]] == ["2024-03-10"]

    def test_monthly_rows(self, admin_client, store):
        data = admin_client.get(
            "/api/admin/stats/sales",
            params={"period": "monthly", "startDate": "2024-01-01T00:00:00", "endDate": "2024-03-31T00:00:00"},
        ).json()["data"]

        assert data == [
            {"year": 2024, "month": 1, "total": 1000.0, "count": 1},
            {"year": 2024, "month": 2, "total": 0.0, "count": 0},
            {"year": 2024, "month": 3, "total": 200.0, "count": 1},
        ]

    def test_invalid_period(self, admin_client):
        response = admin_client.get("/api/admin/stats/sales", params={"period": "hourly"})

        assert response.status_code == 400
        assert "Invalid period 'hourly'. Use daily, monthly, or yearly." in response.text

    def test_end_before_start(self, admin_client):
        response = admin_client.get(
            "/api/admin/stats/sales",
            params={"period": "daily", "startDate": "2024-03-10T00:00:00", "endDate": "2024-03-01T00:00:00"},
        )
        assert response.status_code == 400

    def test_malformed_date(self, admin_client):
        response = admin_client.get("/api/admin/stats/sales", params={"startDate": "yesterday"})
        assert response.status_code == 400


class TestProductAndCustomerStats:
    RANGE = {"startDate": "2024-01-01T00:00:00", "endDate": "2024-12-31T23:59:59"}

    def test_top_products(self, admin_client, store):
        rows = admin_client.get("/api/admin/stats/products", params=self.RANGE).json()

        assert [(row["name"], row["totalRevenue"]) for row in rows] == [("Phone", 1000.0), ("Case", 200.0)]
        assert rows[0]["category"] == "Phones"
        assert rows[1]["category"] == "Uncategorized"
        assert rows[1]["averagePrice"] == 50.0

    def test_top_products_by_quantity_in_category(self, admin_client, store):
        rows = admin_client.get(
            "/api/admin/stats/products",
            params={**self.RANGE, "sortBy": "quantity", "category": store["phones"].id},
        ).json()

        assert [row["name"] for row in rows] == ["Phone"]

    def test_top_products_invalid_sort(self, admin_client):
        assert admin_client.get("/api/admin/stats/products", params={"sortBy": "rating"}).status_code == 400

    def test_top_customers(self, admin_client, store):
        rows = admin_client.get("/api/admin/stats/customers", params={"period": "all", "sortBy": "spent"}).json()

        assert rows == [
            {
                "id": rows[0]["id"],
                "username": "lan",
                "fullName": "Nguyen Thi Lan",
                "email": "lan@example.com",
                "phone": "",
                "orderCount": 2,
                "totalSpent": 1200.0,
                "avgOrderValue": 600.0,
            }
        ]

    @pytest.mark.parametrize("params", [{"period": "hourly"}, {"sortBy": "name"}])
    def test_top_customers_invalid(self, admin_client, params):
        assert admin_client.get("/api/admin/stats/customers", params=params).status_code == 400


class TestDashboardAPI:
    def test_dashboard_stats(self, admin_client, store):
        body = admin_client.get("/api/admin/dashboard/stats").json()

        assert body["sales"] == {"total": 1200.0}
        assert body["orders"]["total"] == 4
        assert body["orders"]["byStatus"]["delivered"] == 1
        assert body["customers"]["total"] == 1
        assert body["products"]["total"] == 2
        assert [o["createdAt"][:10] for o in body["recentOrders"]] == [
            "2024-03-10",
            "2024-03-09",
            "2024-01-15",
            "2023-06-01",
        ]

    def test_sales_by_period_monthly(self, admin_client, store):
        body = admin_client.get("/api/admin/dashboard/sales-by-period", params={"year": 2024}).json()

        assert body["period"] == "monthly"
        assert body["data"][0] == {"label": "Jan", "value": 1000.0}

    def test_sales_by_period_daily(self, admin_client, store):
        body = admin_client.get(
            "/api/admin/dashboard/sales-by-period", params={"period": "daily", "year": 2024, "month": 3}
        ).json()

        assert len(body["data"]) == 31
        assert body["data"][8] == {"label": "9", "value": 200.0}

    def test_sales_by_period_yearly_has_five_points(self, admin_client):
        body = admin_client.get("/api/admin/dashboard/sales-by-period", params={"period": "yearly"}).json()
        assert len(body["data"]) == 5

    def test_sales_by_period_invalid(self, admin_client):
        response = admin_client.get("/api/admin/dashboard/sales-by-period", params={"period": "weekly"})
        assert response.status_code == 400

    def test_popular_products(self, admin_client, store):
        rows = admin_client.get("/api/admin/dashboard/popular-products").json()

        assert [(row["name"], row["totalQuantity"]) for row in rows] == [("Case", 4), ("Phone", 1)]

    def test_recent_orders(self, admin_client, store):
        rows = admin_client.get("/api/admin/dashboard/recent-orders", params={"limit": 2}).json()

        assert [row["status"] for row in rows] == ["pending", "shipping"]
        assert rows[1]["user"]["username"] == "lan"
