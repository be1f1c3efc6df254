"""
Tests for order endpoints.

Tests cover:
- Placement with the amount computed from dish prices
- Appending dish lines on update
- Table linkage on placement and cleanup on delete
- Payment and serving status transitions
"""

import pytest

from rest_api.models import DiningTable, Order
from tests.conftest import RESTAURANT_ID

ORDERS = f"/Order/{RESTAURANT_ID}"


def place_order(client, lines, customer_id="CUSTOMER-1", **extra):
    body = {"Customer Id": customer_id, "Dishes": lines, **extra}
    return client.post(ORDERS, json=body)


class TestOrderPlacement:
    """POST /Order/{restaurant_id}"""

    def test_amount_computed_from_dish_prices(self, client, seed_dishes, seed_customer):
        response = place_order(client, [{"DishId": "DISH-1", "Quantity": 3}])

        assert response.status_code == 201
        order = response.json()
        assert order["Order Id"] == "ORDER-1"
        assert order["Amount"] == 300
        assert order["Dishes"] == [{"DishId": "DISH-1", "Quantity": 3}]
        assert order["Payment Status"] == "PENDING"
        assert order["Serving Status"] == "PENDING"

    def test_ids_follow_highest_suffix(self, client, db_session, seed_dishes, seed_customer):
        first = place_order(client, [{"DishId": "DISH-1", "Quantity": 1}]).json()
        second = place_order(client, [{"DishId": "DISH-2", "Quantity": 1}]).json()

        assert first["Order Id"] == "ORDER-1"
        assert second["Order Id"] == "ORDER-2"

    def test_supplied_amount_is_kept(self, client, seed_dishes, seed_customer):
        response = place_order(client, [{"DishId": "DISH-1", "Quantity": 1}], Amount=90)
        assert response.status_code == 201
        assert response.json()["Amount"] == 90

    def test_missing_customer_or_dishes_is_400(self, client, seed_dishes):
        response = client.post(ORDERS, json={"Dishes": [{"DishId": "DISH-1", "Quantity": 1}]})
        assert response.status_code == 400
        assert response.json()["detail"] == "Customer ID and Dishes are required"

        response = client.post(ORDERS, json={"Customer Id": "CUSTOMER-1", "Dishes": []})
        assert response.status_code == 400

    def test_malformed_line_is_400(self, client, seed_dishes, seed_customer):
        response = place_order(client, [{"DishId": "DISH-1", "Quantity": 0}])
        assert response.status_code == 400
        assert "positive 'Quantity'" in response.json()["detail"]

    def test_unknown_dish_inserts_nothing(self, client, db_session, seed_dishes, seed_customer, seed_tables):
        table = db_session.get(DiningTable, (RESTAURANT_ID, 1))
        table.customer_id = "CUSTOMER-1"
        db_session.commit()

        response = place_order(client, [{"DishId": "DISH-1", "Quantity": 1}, {"DishId": "DISH-99", "Quantity": 1}])

        assert response.status_code == 404
        assert db_session.query(Order).count() == 0
        db_session.refresh(table)
        assert table.order_id is None

    def test_dish_of_another_restaurant_is_unknown(self, client, seed_dishes, seed_customer):
        response = client.post(
            "/Order/restro-2",
            json={"Customer Id": "CUSTOMER-1", "Dishes": [{"DishId": "DISH-1", "Quantity": 1}]},
        )
        assert response.status_code == 404

    def test_links_lowest_numbered_customer_table(self, client, db_session, seed_dishes, seed_customer, seed_tables):
        for table_no in (3, 2):
            db_session.get(DiningTable, (RESTAURANT_ID, table_no)).customer_id = "CUSTOMER-1"
        db_session.commit()

        order = place_order(client, [{"DishId": "DISH-2", "Quantity": 2}]).json()

        assert order["Table No"] == 2
        tables = client.get(f"/Table/{RESTAURANT_ID}/customer/CUSTOMER-1").json()
        linked = {t["Table No"]: t["Order Id"] for t in tables}
        assert linked == {2: order["Order Id"], 3: None}


class TestOrderUpdate:
    """PUT /Order/{restaurant_id}/{order_id}"""

    def test_lines_are_appended_and_amount_grows(self, client, seed_dishes, seed_customer):
        order = place_order(client, [{"DishId": "DISH-1", "Quantity": 3}]).json()

        response = client.put(
            f"{ORDERS}/{order['Order Id']}",
            json={"Dishes": [{"DishId": "DISH-2", "Quantity": 1}]},
        )

        assert response.status_code == 200
        updated = response.json()
        assert updated["Amount"] == 380
        assert updated["Dishes"] == [
            {"DishId": "DISH-1", "Quantity": 3},
            {"DishId": "DISH-2", "Quantity": 1},
        ]

    def test_unknown_dish_leaves_order_unchanged(self, client, seed_dishes, seed_customer):
        order = place_order(client, [{"DishId": "DISH-1", "Quantity": 1}]).json()

        response = client.put(
            f"{ORDERS}/{order['Order Id']}",
            json={"Dishes": [{"DishId": "DISH-42", "Quantity": 1}]},
        )

        assert response.status_code == 404
        stored = client.get(f"{ORDERS}/{order['Order Id']}").json()
        assert stored["Amount"] == 100
        assert len(stored["Dishes"]) == 1

    def test_update_unknown_order_is_404(self, client, seed_dishes):
        response = client.put(f"{ORDERS}/ORDER-404", json={"Table No": 4})
        assert response.status_code == 404


class TestOrderStatus:
    """PATCH /Order/{restaurant_id}/{order_id}/status"""

    @pytest.fixture
    def order_id(self, client, seed_dishes, seed_customer):
        return place_order(client, [{"DishId": "DISH-1", "Quantity": 1}]).json()["Order Id"]

    def test_pay_and_serve(self, client, order_id):
        response = client.patch(
            f"{ORDERS}/{order_id}/status",
            json={"Payment Status": "PAID", "Serving Status": "PREPARING"},
        )
        assert response.status_code == 200
        assert response.json()["Payment Status"] == "PAID"
        assert response.json()["Serving Status"] == "PREPARING"

        response = client.patch(f"{ORDERS}/{order_id}/status", json={"Serving Status": "SERVED"})
        assert response.json()["Serving Status"] == "SERVED"

    def test_terminal_state_cannot_change(self, client, order_id):
        client.patch(f"{ORDERS}/{order_id}/status", json={"Serving Status": "CANCELLED"})

        response = client.patch(f"{ORDERS}/{order_id}/status", json={"Serving Status": "PREPARING"})

        assert response.status_code == 400
        assert "transition" in response.json()["detail"]

    def test_reapplying_current_status_is_noop(self, client, order_id):
        client.patch(f"{ORDERS}/{order_id}/status", json={"Payment Status": "PAID"})

        response = client.patch(f"{ORDERS}/{order_id}/status", json={"Payment Status": "PAID"})

        assert response.status_code == 200
        assert response.json()["Payment Status"] == "PAID"

    def test_empty_body_is_400(self, client, order_id):
        response = client.patch(f"{ORDERS}/{order_id}/status", json={})
        assert response.status_code == 400


class TestOrderQueries:
    def test_filter_by_payment_status(self, client, seed_dishes, seed_customer):
        paid = place_order(client, [{"DishId": "DISH-1", "Quantity": 1}]).json()["Order Id"]
        place_order(client, [{"DishId": "DISH-2", "Quantity": 1}])
        client.patch(f"{ORDERS}/{paid}/status", json={"Payment Status": "PAID"})

        response = client.get(ORDERS, params={"paymentStatus": "paid"})

        assert response.status_code == 200
        assert [o["Order Id"] for o in response.json()] == [paid]

    def test_customer_without_orders_is_404(self, client, seed_restaurant):
        response = client.get(f"{ORDERS}/customer/CUSTOMER-9")
        assert response.status_code == 404
        assert response.json()["detail"] == "No orders found for this customer"

    def test_delete_clears_table_link(self, client, db_session, seed_dishes, seed_customer, seed_tables):
        db_session.get(DiningTable, (RESTAURANT_ID, 1)).customer_id = "CUSTOMER-1"
        db_session.commit()
        order_id = place_order(client, [{"DishId": "DISH-1", "Quantity": 1}]).json()["Order Id"]

        response = client.delete(f"{ORDERS}/{order_id}")

        assert response.status_code == 200
        assert response.json() == {"message": "Order deleted successfully"}
        assert client.get(f"{ORDERS}/{order_id}").status_code == 404
        assert client.get(f"/Table/{RESTAURANT_ID}/1").json()["Order Id"] is None
