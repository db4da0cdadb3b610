"""Integration tests for the signed-in cart endpoints."""


def _add(client, headers, product_id, quantity=1):
    response = client.post("/cart/items", json={"product_id": product_id, "quantity": quantity}, headers=headers)
    assert response.status_code == 200
    return response.json()


class TestCartEndpoints:
    def test_view_creates_empty_cart(self, client, as_customer):
        response = client.get("/cart", headers=as_customer)
        assert response.status_code == 200
        data = response.json()
        assert data["items"] == []
        assert data["id"] is not None
        assert data["can_checkout"] is False

    def test_anonymous_caller(self, client):
        response = client.get("/cart")
        assert response.status_code == 403

    def test_add_item(self, client, as_customer, make_product):
        product = make_product(name="Yoga Mat", price=19.99, stock=10)
        data = _add(client, as_customer, product.id, 2)

        assert data["total_items"] == 2
        assert data["total_amount"] == 39.98
        assert data["pricing"] == {"subtotal": 39.98, "shipping_cost": 5.99, "tax": 3.2, "total": 49.17}
        assert data["items"][0]["stock_status"] == "in_stock"

    def test_add_unknown_product(self, client, as_customer):
        response = client.post("/cart/items", json={"product_id": "missing"}, headers=as_customer)
        assert response.status_code == 404

    def test_add_zero_quantity(self, client, as_customer, make_product):
        body = {"product_id": make_product().id, "quantity": 0}
        response = client.post("/cart/items", json=body, headers=as_customer)
        assert response.status_code == 422

    def test_update_and_remove(self, client, as_customer, make_product):
        item_id = _add(client, as_customer, make_product(price=5.0).id)["items"][0]["id"]

        updated = client.put(f"/cart/items/{item_id}", json={"quantity": 4}, headers=as_customer).json()
        assert updated["total_items"] == 4

        removed = client.delete(f"/cart/items/{item_id}", headers=as_customer).json()
        assert removed["items"] == []

        again = client.delete(f"/cart/items/{item_id}", headers=as_customer)
        assert again.status_code == 200

    def test_quantity_zero_removes(self, client, as_customer, make_product):
        item_id = _add(client, as_customer, make_product().id)["items"][0]["id"]
        data = client.put(f"/cart/items/{item_id}", json={"quantity": 0}, headers=as_customer).json()
        assert data["items"] == []

    def test_clear(self, client, as_customer, make_product):
        _add(client, as_customer, make_product(name="A").id)
        _add(client, as_customer, make_product(name="B").id)
        data = client.delete("/cart", headers=as_customer).json()
        assert data["total_items"] == 0

    def test_stock_warning(self, client, as_customer, make_product):
        data = _add(client, as_customer, make_product(stock=1).id, 3)
        assert data["items"][0]["stock_status"] == "exceeds_stock"
        assert data["can_checkout"] is False
