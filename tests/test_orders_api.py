"""Integration tests for the /api/orders endpoints."""
from sqlalchemy.exc import SQLAlchemyError

from canteen.api.routes import orders as orders_routes

SCENARIO_ORDER = {
    "items": [{"itemId": 1, "quantity": 2}, {"itemId": 3, "quantity": 1}],
    "totalPrice": 25.50,
}


def _place(client, payload=None):
    response = client.post("/api/orders", json=payload or SCENARIO_ORDER)
    assert response.status_code == 201
    return response.json()["orderId"]


class TestCreateOrderEndpoint:
    def test_create_order(self, client, menu):
        response = client.post("/api/orders", json=SCENARIO_ORDER)

        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "Order placed successfully."
        assert isinstance(data["orderId"], int)

    def test_listing_shows_created_order(self, client, menu):
        _place(client)

        orders = client.get("/api/orders").json()

        assert len(orders) == 1
        order = orders[0]
        assert order["status"] == "received"
        assert order["totalPrice"] == "25.50"
        assert "createdAt" in order
        assert [(m["id"], m["quantity"]) for m in order["MenuItems"]] == [(1, 2), (3, 1)]
        assert order["MenuItems"][0]["name"] == "Burger"
        assert order["MenuItems"][0]["price"] == "10.00"

    def test_missing_quantity_is_invalid_item_data(self, client, menu):
        response = client.post(
            "/api/orders",
            json={"items": [{"itemId": 1, "quantity": 1}, {"itemId": 2}], "totalPrice": 14},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid item data"
        assert client.get("/api/orders").json() == []

    def test_missing_item_id_is_invalid_item_data(self, client, menu):
        response = client.post("/api/orders", json={"items": [{"quantity": 3}], "totalPrice": 1})

        assert response.status_code == 400
        assert client.get("/api/orders").json() == []

    def test_unknown_menu_item(self, client, menu):
        response = client.post("/api/orders", json={"items": [{"itemId": 77, "quantity": 1}]})

        assert response.status_code == 400
        assert "77" in response.json()["detail"]

    def test_empty_items(self, client, menu):
        response = client.post("/api/orders", json={"items": [], "totalPrice": 0})

        assert response.status_code == 400

    def test_total_price_out_of_range(self, client, menu):
        response = client.post("/api/orders", json={"items": [{"itemId": 1, "quantity": 1}], "totalPrice": 1e30})

        assert response.status_code == 400
        assert "out of range" in response.json()["detail"]
        assert client.get("/api/orders").json() == []

    def test_quantity_out_of_range(self, client, menu):
        response = client.post("/api/orders", json={"items": [{"itemId": 1, "quantity": 10**30}]})

        assert response.status_code == 400
        assert response.json()["detail"].startswith("Invalid item data")
        assert client.get("/api/orders").json() == []

    def test_total_is_computed_when_omitted(self, client, menu):
        _place(client, {"items": [{"itemId": 2, "quantity": 3}]})

        assert client.get("/api/orders").json()[0]["totalPrice"] == "12.00"


class TestUpdateStatusEndpoint:
    def test_update_status(self, client, menu):
        order_id = _place(client)

        response = client.put(f"/api/orders/{order_id}/status", json={"status": "picked"})

        assert response.status_code == 200
        assert response.json() == {"message": "Order status updated successfully"}
        assert client.get(f"/api/orders/{order_id}").json()["status"] == "picked"

    def test_not_found(self, client, menu):
        response = client.put("/api/orders/999/status", json={"status": "picked"})

        assert response.status_code == 404
        assert client.get("/api/orders").json() == []

    def test_unknown_status(self, client, menu):
        order_id = _place(client)

        response = client.put(f"/api/orders/{order_id}/status", json={"status": "eaten"})

        assert response.status_code == 400
        assert client.get(f"/api/orders/{order_id}").json()["status"] == "received"

    def test_missing_status(self, client, menu):
        order_id = _place(client)

        response = client.put(f"/api/orders/{order_id}/status", json={})

        assert response.status_code == 400

    def test_prepared_order_cannot_go_back(self, client, menu):
        order_id = _place(client)
        client.put(f"/api/orders/{order_id}/status", json={"status": "prepared"})

        for status in ("received", "picked"):
            response = client.put(f"/api/orders/{order_id}/status", json={"status": status})
            assert response.status_code == 409

        assert client.get(f"/api/orders/{order_id}").json()["status"] == "prepared"


class TestDeleteOrderEndpoint:
    def test_prepare_then_delete(self, client, menu):
        order_id = _place(client)

        assert client.put(f"/api/orders/{order_id}/status", json={"status": "prepared"}).status_code == 200
        response = client.delete(f"/api/orders/{order_id}")

        assert response.status_code == 200
        assert response.json() == {"message": "Order deleted successfully"}
        assert client.get("/api/orders").json() == []
        assert client.get(f"/api/orders/{order_id}").status_code == 404

    def test_not_found(self, client, menu):
        response = client.delete("/api/orders/999")

        assert response.status_code == 404

    def test_deleting_order_frees_menu_items(self, client, menu):
        order_id = _place(client)
        client.delete(f"/api/orders/{order_id}")

        # no order lines reference the item any more
        assert client.delete("/api/menuItems/1").status_code == 200


class TestListOrdersEndpoint:
    def test_empty(self, client):
        response = client.get("/api/orders")

        assert response.status_code == 200
        assert response.json() == []

    def test_filter_by_status(self, client, menu):
        first = _place(client)
        _place(client)
        client.put(f"/api/orders/{first}/status", json={"status": "picked"})

        picked = client.get("/api/orders", params={"status": "picked"}).json()

        assert [o["id"] for o in picked] == [first]

    def test_filter_by_unknown_status(self, client, menu):
        response = client.get("/api/orders", params={"status": "gone"})

        assert response.status_code == 400

    def test_get_single_order_not_found(self, client):
        assert client.get("/api/orders/5").status_code == 404

    def test_menu_item_quantities(self, client, menu):
        _place(client)
        _place(client, {"items": [{"itemId": 1, "quantity": 1}]})

        response = client.get("/api/orders/stats/items")

        assert response.status_code == 200
        assert response.json() == [
            {"menuItemId": 1, "name": "Burger", "totalQuantity": 3},
            {"menuItemId": 3, "name": "Salad", "totalQuantity": 1},
        ]


class TestStoreErrors:
    def test_get_order(self, client, monkeypatch):
        async def broken(db, order_id):
            raise SQLAlchemyError("connection lost")

        monkeypatch.setattr(orders_routes, "get_order_by_id", broken)

        response = client.get("/api/orders/1")

        assert response.status_code == 500
        assert response.json() == {"detail": "Error fetching order"}

    def test_menu_item_quantities(self, client, monkeypatch):
        async def broken(db, limit=None):
            raise SQLAlchemyError("connection lost")

        monkeypatch.setattr(orders_routes, "get_menu_item_quantities", broken)

        response = client.get("/api/orders/stats/items")

        assert response.status_code == 500
        assert "connection lost" not in response.text
