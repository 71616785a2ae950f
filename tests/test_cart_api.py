"""API tests for /api/cart"""

from decimal import Decimal


class TestCart:

    def test_get_without_cart(self, client, user_headers):
        response = client.get("/api/cart", headers=user_headers)

        assert response.status_code == 200
        assert response.json()["cart"] is None
        assert response.json()["items"] == []

    def test_first_add_creates_cart(self, client, user_headers, make_product):
        product = make_product(price="10")

        response = client.post("/api/cart", json={"product_id": product.id, "quantity": 2}, headers=user_headers)

        assert response.status_code == 201
        body = response.json()
        assert body["items"] == [{"product_id": product.id, "quantity": 2}]
        assert Decimal(body["subtotal"]) == Decimal("20")

    def test_repeated_add_merges_quantity(self, client, user_headers, make_product, cart_db, user):
        product = make_product()
        client.post("/api/cart", json={"product_id": product.id, "quantity": 1}, headers=user_headers)

        response = client.post("/api/cart", json={"product_id": product.id, "quantity": 3}, headers=user_headers)

        assert response.status_code == 200
        assert response.json()["items"] == [{"product_id": product.id, "quantity": 4}]
        assert len(cart_db.get_cart_for_user(user.id).items) == 1

    def test_items_keep_insertion_order(self, client, user_headers, make_product):
        first = make_product(name="First")
        second = make_product(name="Second")
        client.post("/api/cart", json={"product_id": first.id}, headers=user_headers)
        client.post("/api/cart", json={"product_id": second.id}, headers=user_headers)

        items = client.get("/api/cart", headers=user_headers).json()["items"]

        assert [item["product_id"] for item in items] == [first.id, second.id]

    def test_add_unknown_product(self, client, user_headers):
        response = client.post("/api/cart", json={"product_id": "missing", "quantity": 1}, headers=user_headers)

        assert response.status_code == 404

    def test_add_rejects_non_positive_quantity(self, client, user_headers, make_product):
        product = make_product()

        response = client.post("/api/cart", json={"product_id": product.id, "quantity": 0}, headers=user_headers)

        assert response.status_code == 422

    def test_update_quantity(self, client, user_headers, make_product):
        product = make_product()
        client.post("/api/cart", json={"product_id": product.id, "quantity": 1}, headers=user_headers)

        response = client.put(f"/api/cart/{product.id}", json={"quantity": 5}, headers=user_headers)

        assert response.status_code == 200
        assert response.json()["items"] == [{"product_id": product.id, "quantity": 5}]

    def test_update_item_not_in_cart(self, client, user_headers, make_product):
        product = make_product()

        response = client.put(f"/api/cart/{product.id}", json={"quantity": 5}, headers=user_headers)

        assert response.status_code == 404

    def test_remove_item(self, client, user_headers, make_product):
        kept = make_product(name="Kept")
        removed = make_product(name="Removed")
        client.post("/api/cart", json={"product_id": kept.id}, headers=user_headers)
        client.post("/api/cart", json={"product_id": removed.id}, headers=user_headers)

        response = client.delete(f"/api/cart/{removed.id}", headers=user_headers)

        assert response.status_code == 200
        assert [item["product_id"] for item in response.json()["items"]] == [kept.id]

    def test_carts_are_per_user(self, client, user_headers, other_headers, make_product):
        product = make_product()
        client.post("/api/cart", json={"product_id": product.id}, headers=user_headers)

        assert client.get("/api/cart", headers=other_headers).json()["items"] == []

    def test_requires_authentication(self, client):
        assert client.get("/api/cart").status_code == 401


class TestConcurrentCartChanges:

    def test_add_recreates_cart_deleted_mid_write(self, cart_db, user, make_product, monkeypatch):
        product = make_product()
        existing, _ = cart_db.add_item(user.id, product.id, 1)
        push_item = cart_db._push_item
        calls = []

        def push_after_placement(*args):
            # A placement consumes the cart before the first push lands
            if not calls:
                cart_db.collection.delete_one({"_id": existing.id})
            calls.append(args)
            return push_item(*args)

        monkeypatch.setattr(cart_db, "_push_item", push_after_placement)
        other = make_product(name="Other")

        cart, created = cart_db.add_item(user.id, other.id, 2)

        assert created
        assert cart.id != existing.id
        assert [(item.product_id, item.quantity) for item in cart.items] == [(other.id, 2)]

    def test_add_reports_missing_cart_after_write(self, client, app, user_headers, make_product, monkeypatch):
        product = make_product()
        monkeypatch.setattr(app.state.cart_db, "get_cart_for_user", lambda user_id: None)

        response = client.post("/api/cart", json={"product_id": product.id}, headers=user_headers)

        assert response.status_code == 404
        assert response.json()["detail"] == "Cart not found"
