import pytest


@pytest.fixture
def product(persisted, make_product):
    return persisted(make_product, name="Samsung Galaxy S24")


class TestListReviews:
    def test_empty_product(self, client, product):
        response = client.get(f"/api/products/{product.id}/reviews")

        assert response.status_code == 200
        body = response.json()
        assert body["reviews"] == []
        assert body["pagination"]["totalItems"] == 0
        assert body["stats"]["averageRating"] == 0.0
        assert [row["rating"] for row in body["stats"]["distribution"]] == [5, 4, 3, 2, 1]

    def test_unknown_product(self, client):
        response = client.get("/api/products/999/reviews")

        assert response.status_code == 404
        assert "Product not found" in response.text

    def test_paginates(self, client, product, customer_client, login, persisted, make_user):
        customer_client.post(f"/api/products/{product.id}/reviews", json={"rating": 5})
        persisted(make_user, username="minh")
        login("minh").post(f"/api/products/{product.id}/reviews", json={"rating": 3})

        body = client.get(f"/api/products/{product.id}/reviews", params={"limit": 1}).json()

        assert len(body["reviews"]) == 1
        assert body["pagination"]["totalPages"] == 2
        assert body["stats"]["totalReviews"] == 2
        assert body["stats"]["averageRating"] == 4.0


class TestSubmitReviewAPI:
    def test_requires_login(self, client, product):
        response = client.post(f"/api/products/{product.id}/reviews", json={"rating": 5})

        assert response.status_code == 401
        assert response.json() == {"error": "Authentication required"}

    def test_submit(self, client, customer, customer_client, product):
        response = customer_client.post(
            f"/api/products/{product.id}/reviews",
            json={"rating": 4, "title": "Solid", "comment": "Battery lasts two days"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["rating"] == 4
        assert body["userId"] == customer.id
        assert body["user"]["fullName"] == "Nguyen Thi Lan"
        assert body["isVerifiedPurchase"] is False

        detail = client.get(f"/api/products/{product.id}").json()
        assert detail["rating"] == 4.0
        assert detail["reviewCount"] == 1

    def test_verified_purchase(self, customer, customer_client, product, persisted, make_order):
        persisted(make_order, [(product, 1)], user=customer, status="delivered")

        response = customer_client.post(f"/api/products/{product.id}/reviews", json={"rating": 5})
        assert response.json()["isVerifiedPurchase"] is True

    @pytest.mark.parametrize("rating", [0, 6])
    def test_rating_out_of_range(self, customer_client, product, rating):
        response = customer_client.post(f"/api/products/{product.id}/reviews", json={"rating": rating})
        assert response.status_code == 400

    def test_unknown_product(self, customer_client):
        response = customer_client.post("/api/products/999/reviews", json={"rating": 5})
        assert response.status_code == 404


class TestDeleteReviewAPI:
    def _review(self, client, product):
        return client.post(f"/api/products/{product.id}/reviews", json={"rating": 2}).json()

    def test_author_deletes(self, client, customer_client, product):
        review = self._review(customer_client, product)

        response = customer_client.delete(f"/api/products/{product.id}/reviews/{review['id']}")

        assert response.status_code == 204
        assert client.get(f"/api/products/{product.id}/reviews").json()["reviews"] == []
        assert client.get(f"/api/products/{product.id}").json()["reviewCount"] == 0

    def test_admin_deletes(self, admin_client, customer_client, product):
        review = self._review(customer_client, product)

        response = admin_client.delete(f"/api/products/{product.id}/reviews/{review['id']}")
        assert response.status_code == 204

    def test_other_customer_is_forbidden(self, customer_client, login, persisted, make_user, product):
        review = self._review(customer_client, product)
        persisted(make_user, username="minh")

        response = login("minh").delete(f"/api/products/{product.id}/reviews/{review['id']}")

        assert response.status_code == 403
        assert response.json() == {"error": "You can only delete your own reviews"}

    def test_anonymous_delete(self, client, customer_client, product):
        review = self._review(customer_client, product)
        assert client.delete(f"/api/products/{product.id}/reviews/{review['id']}").status_code == 401

    def test_wrong_product(self, customer_client, product, persisted, make_product):
        review = self._review(customer_client, product)
        other = persisted(make_product)

        response = customer_client.delete(f"/api/products/{other.id}/reviews/{review['id']}")

        assert response.status_code == 404
        assert "Review not found" in response.text
