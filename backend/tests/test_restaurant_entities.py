"""
Tests for restaurant-scoped CRUD endpoints.

Tests cover, per entity:
- Create, then get by id returns the same record with a well-formed id
- Update changes only the supplied fields
- Delete removes the record
- Restaurant scoping of reads
"""

import re

import pytest

from rest_api.models import Customer
from tests.conftest import CUSTOMER_PASSWORD, RESTAURANT_ID


class TestRestaurants:
    def test_create_list_update_delete(self, client, db_session):
        response = client.post(
            "/restaurant",
            json={"Name Id": "Spice Route", "Location Id": "MG Road", "Restaurant logo": {"url": "logo.png"}},
        )
        assert response.status_code == 201
        created = response.json()
        assert created["Restaurant Id"] == "restro-1"
        assert created["Restaurant logo"] == {"url": "logo.png"}

        second = client.post("/restaurant", json={"Name Id": "Second"}).json()
        assert second["Restaurant Id"] == "restro-2"
        assert second["Restaurant logo"] == {}

        response = client.put("/restaurant/restro-1", json={"Location Id": "Brigade Road"})
        assert response.status_code == 200
        assert response.json()["Location Id"] == "Brigade Road"
        assert response.json()["Name Id"] == "Spice Route"

        assert client.delete("/restaurant/restro-2").json() == {"message": "Restaurant deleted successfully"}
        assert [r["Restaurant Id"] for r in client.get("/restaurant").json()] == ["restro-1"]

    def test_update_unknown_restaurant_is_404(self, client, db_session):
        assert client.put("/restaurant/restro-9", json={"Name Id": "x"}).status_code == 404


class TestCustomers:
    BASE = f"/Customer/{RESTAURANT_ID}"

    def test_create_hashes_password_and_hides_it(self, client, db_session, seed_restaurant):
        response = client.post(
            self.BASE,
            json={"Name": "Meera", "Email": "meera@test.com", "Password": "pw12345", "Contact Number": "99999"},
        )

        assert response.status_code == 201
        created = response.json()
        assert re.fullmatch(r"CUSTOMER-\d+", created["Customer Id"])
        assert "Password" not in created
        stored = db_session.get(Customer, created["Customer Id"])
        assert stored.password != "pw12345"
        assert stored.password.startswith("$2")

    def test_missing_email_or_password_is_400(self, client, seed_restaurant):
        response = client.post(self.BASE, json={"Name": "No Email"})
        assert response.status_code == 400
        assert response.json()["detail"] == "Email and password are required"

    def test_duplicate_email_is_409(self, client, seed_customer):
        response = client.post(self.BASE, json={"Email": "asha@test.com", "Password": "other"})
        assert response.status_code == 409

    def test_login(self, client, seed_customer):
        response = client.post(f"{self.BASE}/login", json={"Email": "asha@test.com", "Password": CUSTOMER_PASSWORD})
        assert response.status_code == 200
        assert response.json()["Customer Id"] == "CUSTOMER-1"

        response = client.post(f"{self.BASE}/login", json={"Email": "asha@test.com", "Password": "wrong"})
        assert response.status_code == 401

        response = client.post(f"{self.BASE}/login", json={"Email": "asha@test.com"})
        assert response.status_code == 400

    def test_login_is_scoped_to_restaurant(self, client, seed_customer):
        response = client.post(
            "/Customer/restro-2/login", json={"Email": "asha@test.com", "Password": CUSTOMER_PASSWORD}
        )
        assert response.status_code == 401

    def test_update_keeps_unspecified_fields(self, client, seed_customer):
        response = client.put(f"{self.BASE}/CUSTOMER-1", json={"Contact Number": "12345"})

        assert response.status_code == 200
        updated = response.json()
        assert updated["Contact Number"] == "12345"
        assert updated["Name"] == "Asha"
        assert updated["Email"] == "asha@test.com"

    def test_password_change_allows_new_login(self, client, seed_customer):
        client.put(f"{self.BASE}/CUSTOMER-1", json={"Password": "changed"})
        response = client.post(f"{self.BASE}/login", json={"Email": "asha@test.com", "Password": "changed"})
        assert response.status_code == 200

    def test_list_returns_every_customer(self, client, db_session, seed_restaurant):
        db_session.add_all(
            Customer(
                customer_id=f"CUSTOMER-{n}",
                restaurant_id=RESTAURANT_ID,
                email=f"diner{n}@test.com",
                password="$2b$12$placeholder",
                images=[],
            )
            for n in range(1, 61)
        )
        db_session.commit()

        response = client.get(self.BASE)

        assert response.status_code == 200
        assert len(response.json()) == 60

    def test_overlong_password_is_400(self, client, seed_restaurant):
        response = client.post(self.BASE, json={"Email": "long@test.com", "Password": "a" * 80})
        assert response.status_code == 400
        assert response.json()["detail"] == "Password must be at most 72 bytes"

    @pytest.mark.parametrize("field", ["Password", "Email"])
    @pytest.mark.parametrize("value", ["", "   "])
    def test_blank_credential_update_is_400(self, client, seed_customer, field, value):
        response = client.put(f"{self.BASE}/CUSTOMER-1", json={field: value})
        assert response.status_code == 400

        response = client.post(f"{self.BASE}/login", json={"Email": "asha@test.com", "Password": CUSTOMER_PASSWORD})
        assert response.status_code == 200

    def test_delete(self, client, seed_customer):
        response = client.delete(f"{self.BASE}/CUSTOMER-1")
        assert response.status_code == 200
        assert client.get(f"{self.BASE}/CUSTOMER-1").status_code == 404


class TestChefs:
    BASE = f"/Chef/{RESTAURANT_ID}"

    def test_create_requires_name(self, client, seed_restaurant):
        response = client.post(self.BASE, json={"Email": "c@test.com", "Password": "pw"})
        assert response.status_code == 400
        assert response.json()["detail"] == "Name, email and password are required"

    def test_create_and_login(self, client, seed_chef):
        created = client.post(self.BASE, json={"Name": "Kiran", "Email": "kiran@test.com", "Password": "pw"}).json()
        assert created == {
            "Chef Id": "CHEF-2",
            "Restaurant Id": RESTAURANT_ID,
            "Name": "Kiran",
            "Email": "kiran@test.com",
        }

        response = client.post(f"{self.BASE}/login", json={"Email": "ravi@test.com", "Password": "chefpass"})
        assert response.status_code == 200
        assert response.json()["Chef Id"] == "CHEF-1"

    def test_duplicate_email_is_409(self, client, seed_chef):
        response = client.post(self.BASE, json={"Name": "Other", "Email": "ravi@test.com", "Password": "pw"})
        assert response.status_code == 409

    def test_wrong_password_is_401(self, client, seed_chef):
        response = client.post(f"{self.BASE}/login", json={"Email": "ravi@test.com", "Password": "wrong"})
        assert response.status_code == 401

        response = client.post(f"{self.BASE}/login", json={"Email": "nobody@test.com", "Password": "chefpass"})
        assert response.status_code == 401


class TestAdmins:
    BASE = f"/Admin/{RESTAURANT_ID}"

    def test_role_prefixed_ids(self, client, seed_restaurant):
        manager = client.post(self.BASE, json={"Email": "m@test.com", "Password": "pw", "Role": "Manager"})
        chef = client.post(self.BASE, json={"Email": "c@test.com", "Password": "pw", "Role": "Chef"})
        second = client.post(self.BASE, json={"Email": "m2@test.com", "Password": "pw", "Role": "Manager"})

        assert manager.status_code == 201
        assert manager.json()["adminId"] == "Manager-1"
        assert chef.json()["adminId"] == "Chef-1"
        assert second.json()["adminId"] == "Manager-2"

        chefs = client.get(f"{self.BASE}/chefs").json()
        assert [a["Admin Id"] for a in chefs] == ["Chef-1"]

    def test_unknown_role_is_400(self, client, seed_restaurant):
        response = client.post(self.BASE, json={"Email": "x@test.com", "Password": "pw", "Role": "Owner"})
        assert response.status_code == 400

    def test_login_returns_summary(self, client, seed_restaurant):
        client.post(
            self.BASE,
            json={"Admin Name": "Priya", "Email": "priya@test.com", "Password": "pw", "Role": "Manager"},
        )

        response = client.post(f"{self.BASE}/login", json={"Email": "priya@test.com", "Password": "pw"})

        assert response.status_code == 200
        assert response.json() == {
            "message": "Login successful",
            "admin": {"Admin Id": "Manager-1", "Admin Name": "Priya", "Role": "Manager"},
        }

        response = client.post(f"{self.BASE}/login", json={"Email": "priya@test.com", "Password": "nope"})
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid credentials"


class TestDishes:
    BASE = f"/Dish/{RESTAURANT_ID}"

    def test_create_parses_list_fields(self, client, seed_restaurant):
        response = client.post(
            self.BASE,
            json={
                "Name": "Idli",
                "Price": 40,
                "Type of Dish": '["Breakfast", "Veg"]',
                "Genre of Taste": "Mild",
                "Images": None,
            },
        )

        assert response.status_code == 201
        dish = response.json()
        assert dish["Dish Id"] == "DISH-1"
        assert dish["Type of Dish"] == ["Breakfast", "Veg"]
        assert dish["Genre of Taste"] == ["Mild"]
        assert dish["Images"] == []
        assert dish["Available"] is True

    def test_missing_name_or_price_is_400(self, client, seed_restaurant):
        assert client.post(self.BASE, json={"Name": "No price"}).status_code == 400

    def test_get_unknown_dish(self, client, seed_restaurant):
        response = client.get(f"{self.BASE}/DISH-7")
        assert response.status_code == 404
        assert response.json()["detail"] == "Dish not found"

    def test_menu_is_scoped_to_restaurant(self, client, seed_dishes):
        assert len(client.get(self.BASE).json()) == 2
        assert client.get("/Dish/restro-2").json() == []

    def test_update_and_delete(self, client, seed_dishes):
        response = client.put(f"{self.BASE}/DISH-1", json={"Price": 120, "Available": False})
        assert response.status_code == 200
        assert response.json()["Price"] == 120
        assert response.json()["Available"] is False
        assert response.json()["Name"] == "Masala Dosa"

        assert client.delete(f"{self.BASE}/DISH-1").status_code == 200
        assert client.get(f"{self.BASE}/DISH-1").status_code == 404


class TestDishImages:
    @pytest.fixture
    def storage(self, tmp_path, monkeypatch):
        from rest_api.routers.restaurant import dishes
        from rest_api.services.storage.local_backend import LocalBackend

        backend = LocalBackend(base_dir=str(tmp_path), base_url="/media")
        monkeypatch.setattr(dishes, "get_storage", lambda: backend)
        return backend

    def test_upload_then_resolve_url(self, client, storage, tmp_path):
        response = client.post(
            "/Dish/upload",
            files={"image": ("My Dosa.png", b"\x89PNG fake image", "image/png")},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["fileName"].endswith("_My_Dosa.png")
        assert body["url"] == f"/media/dishes/{body['fileName']}"

        response = client.get(f"/Dish/image-url/{body['fileName']}")
        assert response.status_code == 200
        assert response.json()["url"] == body["url"]
        assert response.json()["expiresIn"] is None

    def test_non_image_is_rejected(self, client, storage):
        response = client.post("/Dish/upload", files={"image": ("notes.txt", b"hello", "text/plain")})
        assert response.status_code == 400
        assert response.json()["detail"] == "Only image files are allowed"

    def test_missing_file_is_rejected(self, client, storage):
        response = client.post("/Dish/upload", files={"other": ("a.png", b"x", "image/png")})
        assert response.status_code == 400

    def test_unknown_image_is_404(self, client, storage):
        response = client.get("/Dish/image-url/missing.png")
        assert response.status_code == 404
        assert response.json()["detail"] == "Image not found"


class TestTables:
    BASE = f"/Table/{RESTAURANT_ID}"

    def test_create_duplicate_and_get(self, client, seed_restaurant):
        response = client.post(self.BASE, json={"Table No": 5})
        assert response.status_code == 201
        assert response.json() == {
            "Restaurant Id": RESTAURANT_ID,
            "Table No": 5,
            "Customer ID": None,
            "Order Id": None,
        }

        assert client.post(self.BASE, json={"Table No": 5}).status_code == 409
        assert client.post(self.BASE, json={}).status_code == 400
        assert client.get(f"{self.BASE}/5").status_code == 200
        assert client.get(f"{self.BASE}/6").status_code == 404

    def test_seat_and_clear_customer(self, client, seed_tables):
        response = client.put(f"{self.BASE}/2", json={"Customer ID": "CUSTOMER-1"})
        assert response.json()["Customer ID"] == "CUSTOMER-1"

        assert [t["Table No"] for t in client.get(f"{self.BASE}/customer/CUSTOMER-1").json()] == [2]

        response = client.put(f"{self.BASE}/2", json={"Customer ID": None})
        assert response.json()["Customer ID"] is None
        assert client.get(f"{self.BASE}/customer/CUSTOMER-1").status_code == 404

    def test_omitted_field_is_unchanged(self, client, seed_tables):
        client.put(f"{self.BASE}/1", json={"Customer ID": "CUSTOMER-1", "Order Id": "ORDER-1"})
        response = client.put(f"{self.BASE}/1", json={"Order Id": None})
        assert response.json()["Customer ID"] == "CUSTOMER-1"
        assert response.json()["Order Id"] is None


class TestRobots:
    def test_crud_and_lookups(self, client, db_session):
        assert client.get("/Robot").status_code == 404

        response = client.post("/Robot", json={"Order Id": "ORDER-1", "Customer Id": "CUSTOMER-1"})
        assert response.status_code == 201
        robot = response.json()
        assert robot["Robot Id"] == "ROBOT-1"
        assert robot["Status"] == "Assigned"

        assert len(client.get("/Robot/order/ORDER-1").json()) == 1
        assert client.get("/Robot/customer/CUSTOMER-2").status_code == 404

        response = client.put("/Robot/ROBOT-1", json={"Status": "Delivered"})
        assert response.json()["Status"] == "Delivered"
        assert response.json()["Order Id"] == "ORDER-1"

        assert client.delete("/Robot/ROBOT-1").status_code == 200
        assert client.get("/Robot/ROBOT-1").json()["detail"] == "Robot not found"

    def test_missing_order_or_customer_is_400(self, client, db_session):
        response = client.post("/Robot", json={"Order Id": "ORDER-1"})
        assert response.status_code == 400
        assert response.json()["detail"] == "Order ID and Customer ID are required"


class TestFeedback:
    BASE = f"/feedback/{RESTAURANT_ID}"

    def test_envelope_and_per_restaurant_ids(self, client, seed_restaurant):
        response = client.post(
            self.BASE, json={"Feedback": "Great dosa", "Order Id": "ORDER-1", "Customer Id": "CUSTOMER-1"}
        )
        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["data"]["Feedback Id"] == "Fb-1"

        other = client.post("/feedback/restro-2", json={"Feedback": "Slow service"}).json()
        assert other["data"]["Feedback Id"] == "Fb-1"

        listed = client.get(self.BASE).json()
        assert len(listed["data"]) == 1
        assert listed["message"] == "1 feedback entries found"

        assert len(client.get(f"{self.BASE}/order/ORDER-1").json()["data"]) == 1
        assert client.get(f"{self.BASE}/customer/CUSTOMER-9").json()["data"] == []

    def test_empty_text_is_400(self, client, seed_restaurant):
        assert client.post(self.BASE, json={"Feedback": "   "}).status_code == 400

    def test_update_and_delete(self, client, seed_restaurant):
        client.post(self.BASE, json={"Feedback": "Okay", "Order Id": "ORDER-1"})

        response = client.put(f"{self.BASE}/Fb-1", json={"Feedback": "Much better"})
        assert response.json()["data"]["Feedback"] == "Much better"
        assert response.json()["data"]["Order Id"] == "ORDER-1"

        response = client.delete(f"{self.BASE}/Fb-1")
        assert response.json() == {"success": True, "data": None, "message": "Feedback deleted successfully"}
        assert client.get(f"{self.BASE}/Fb-1").status_code == 404
