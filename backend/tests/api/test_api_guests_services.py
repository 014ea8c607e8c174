"""
客人与服务目录 API 测试
"""
from decimal import Decimal
from fastapi.testclient import TestClient


class TestGuestsApi:

    def test_create_and_get_guest(self, client: TestClient, staff_auth_headers):
        response = client.post("/guests", headers=staff_auth_headers, json={
            "first_name": "Grace",
            "last_name": "Hopper",
            "email": "grace@example.com",
            "phone": "555-0199",
            "id_number": "ID-0199"
        })
        assert response.status_code == 201
        guest = response.json()
        assert guest["address"] is None

        response = client.get(f"/guests/{guest['id']}", headers=staff_auth_headers)
        assert response.status_code == 200
        assert response.json()["last_name"] == "Hopper"

    def test_list_guests(self, client: TestClient, staff_auth_headers, sample_guest):
        response = client.get("/guests", headers=staff_auth_headers)
        assert response.status_code == 200
        assert [g["first_name"] for g in response.json()] == ["Ada"]

    def test_missing_fields(self, client: TestClient, staff_auth_headers):
        response = client.post("/guests", headers=staff_auth_headers, json={"first_name": "Solo"})
        assert response.status_code == 422

    def test_missing_guest(self, client: TestClient, staff_auth_headers):
        assert client.get("/guests/missing", headers=staff_auth_headers).status_code == 404


class TestServicesApi:

    def test_create_and_list(self, client: TestClient, staff_auth_headers):
        response = client.post("/services", headers=staff_auth_headers, json={
            "name": "Laundry",
            "price": "12.00"
        })
        assert response.status_code == 201
        assert response.json()["category"] == "service"

        listing = client.get("/services", headers=staff_auth_headers).json()
        assert [s["name"] for s in listing] == ["Laundry"]
        assert Decimal(listing[0]["price"]) == Decimal("12.00")
