"""API tests for /api/orders"""

from decimal import Decimal


def _fill_cart(client, headers, *lines):
    for product, quantity in lines:
        response = client.post(
            "/api/cart",
            json={"product_id": product.id, "quantity": quantity},
            headers=headers,
        )
        assert response.status_code in (200, 201)


class TestPlaceOrder:

    def test_place_order(self, client, user_headers, make_product, product_db):
        product_a = make_product(name="A", price="10", stock=5)
        product_b = make_product(name="B", price="20", stock=1)
        _fill_cart(client, user_headers, (product_a, 2), (product_b, 1))

        response = client.post("/api/orders", json={"shipping_address": "123 Test St"}, headers=user_headers)

        assert response.status_code == 201
        body = response.json()
        assert body["shipping_address"] == "123 Test St"
        assert body["status"] == "pending"
        assert Decimal(body["total_amount"]) == Decimal("40")
        assert product_db.get_product(product_a.id).stock == 3
        assert product_db.get_product(product_b.id).stock == 0

        cart = client.get("/api/cart", headers=user_headers).json()
        assert cart["cart"] is None
        assert cart["items"] == []

    def test_insufficient_stock(self, client, user_headers, make_product, product_db):
        product_a = make_product(name="A", price="10", stock=5)
        product_b = make_product(name="B", price="20", stock=1)
        _fill_cart(client, user_headers, (product_a, 2), (product_b, 1))
        product_db.update_product(product_b.id, {"stock": 0})

        response = client.post("/api/orders", json={"shipping_address": "123 Test St"}, headers=user_headers)

        assert response.status_code == 400
        body = response.json()
        assert body["product_id"] == product_b.id
        assert body["available"] == 0
        assert body["requested"] == 1
        assert "Insufficient stock for product: B" in body["detail"]
        assert product_db.get_product(product_a.id).stock == 5

    def test_empty_cart(self, client, user_headers):
        response = client.post("/api/orders", json={"shipping_address": "123 Test St"}, headers=user_headers)

        assert response.status_code == 400
        assert response.json()["detail"] == "Cart is empty"

    def test_blank_shipping_address_is_rejected(self, client, user_headers, make_product):
        _fill_cart(client, user_headers, (make_product(), 1))

        response = client.post("/api/orders", json={"shipping_address": "   "}, headers=user_headers)

        assert response.status_code == 422

    def test_missing_shipping_address_is_rejected(self, client, user_headers):
        response = client.post("/api/orders", json={}, headers=user_headers)

        assert response.status_code == 422

    def test_requires_authentication(self, client):
        response = client.post("/api/orders", json={"shipping_address": "123 Test St"})

        assert response.status_code == 401


class TestReadOrders:

    def _place(self, client, headers, make_product, address="123 Test St"):
        _fill_cart(client, headers, (make_product(), 1))
        response = client.post("/api/orders", json={"shipping_address": address}, headers=headers)
        assert response.status_code == 201
        return response.json()["id"]

    def test_owner_and_admin_can_read(self, client, user_headers, admin_headers, make_product):
        order_id = self._place(client, user_headers, make_product)

        assert client.get(f"/api/orders/{order_id}", headers=user_headers).json()["id"] == order_id
        assert client.get(f"/api/orders/{order_id}", headers=admin_headers).json()["id"] == order_id

    def test_other_user_is_forbidden(self, client, user_headers, other_headers, make_product):
        other_order_id = self._place(client, other_headers, make_product, "456 Other St")

        response = client.get(f"/api/orders/{other_order_id}", headers=user_headers)

        assert response.status_code == 403

    def test_missing_order(self, client, user_headers):
        assert client.get("/api/orders/missing", headers=user_headers).status_code == 404

    def test_my_orders(self, client, user_headers, other_headers, make_product):
        order_id = self._place(client, user_headers, make_product)
        self._place(client, other_headers, make_product, "456 Other St")

        response = client.get("/api/orders/my-orders", headers=user_headers)

        assert response.status_code == 200
        assert [order["id"] for order in response.json()] == [order_id]

    def test_list_all_orders_admin_only(self, client, user_headers, admin_headers, make_product):
        self._place(client, user_headers, make_product)

        assert client.get("/api/orders", headers=user_headers).status_code == 403
        response = client.get("/api/orders", headers=admin_headers)
        assert response.status_code == 200
        assert len(response.json()) == 1

    def test_invalid_token(self, client):
        response = client.get("/api/orders/my-orders", headers={"x-auth-token": "invalidtoken"})

        assert response.status_code == 401


class TestUpdateOrderStatus:

    def _order_id(self, client, headers, make_product):
        _fill_cart(client, headers, (make_product(), 1))
        return client.post("/api/orders", json={"shipping_address": "123 Test St"}, headers=headers).json()["id"]

    def test_admin_updates_status(self, client, user_headers, admin_headers, make_product):
        order_id = self._order_id(client, user_headers, make_product)

        response = client.put(f"/api/orders/{order_id}", json={"status": "shipped"}, headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["status"] == "shipped"

    def test_invalid_status(self, client, user_headers, admin_headers, make_product):
        order_id = self._order_id(client, user_headers, make_product)

        response = client.put(f"/api/orders/{order_id}", json={"status": "Shipped"}, headers=admin_headers)

        assert response.status_code == 400
        body = response.json()
        assert body["allowed"] == ["pending", "shipped", "delivered", "cancelled"]
        assert client.get(f"/api/orders/{order_id}", headers=user_headers).json()["status"] == "pending"

    def test_user_cannot_update_status(self, client, user_headers, make_product):
        order_id = self._order_id(client, user_headers, make_product)

        response = client.put(f"/api/orders/{order_id}", json={"status": "shipped"}, headers=user_headers)

        assert response.status_code == 403
