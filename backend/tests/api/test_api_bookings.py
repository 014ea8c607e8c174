"""
预订 API 测试
覆盖 /bookings 端点：创建、查询、入住、退房
"""
from fastapi.testclient import TestClient


def _payload(room, guest, **overrides):
    payload = {
        "guest_id": guest.id,
        "room_id": room.id,
        "check_in_date": "2026-03-10T14:00:00",
        "check_out_date": "2026-03-12T11:00:00",
        "number_of_guests": 2,
        "special_requests": "Late arrival",
    }
    payload.update(overrides)
    return payload


class TestCreateBooking:

    def test_create_booking(self, client: TestClient, staff_auth_headers, sample_room, sample_guest):
        response = client.post("/bookings", headers=staff_auth_headers, json=_payload(sample_room, sample_guest))

        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "reserved"
        assert data["special_requests"] == "Late arrival"

        room = client.get(f"/rooms/{sample_room.id}", headers=staff_auth_headers).json()
        assert room["status"] == "reserved"

    def test_capacity_exceeded(self, client: TestClient, staff_auth_headers, sample_room, sample_guest):
        response = client.post("/bookings", headers=staff_auth_headers,
                               json=_payload(sample_room, sample_guest, number_of_guests=3))

        assert response.status_code == 400
        assert "capacity" in response.json()["detail"]

    def test_room_already_reserved(self, client: TestClient, staff_auth_headers, sample_room, sample_guest):
        client.post("/bookings", headers=staff_auth_headers, json=_payload(sample_room, sample_guest))
        response = client.post("/bookings", headers=staff_auth_headers, json=_payload(sample_room, sample_guest))
        assert response.status_code == 409

    def test_unknown_guest(self, client: TestClient, staff_auth_headers, sample_room, sample_guest):
        payload = _payload(sample_room, sample_guest, guest_id="missing")
        response = client.post("/bookings", headers=staff_auth_headers, json=payload)
        assert response.status_code == 404

    def test_zero_guests(self, client: TestClient, staff_auth_headers, sample_room, sample_guest):
        response = client.post("/bookings", headers=staff_auth_headers,
                               json=_payload(sample_room, sample_guest, number_of_guests=0))
        assert response.status_code == 422


class TestBookingQueries:

    def test_list_and_detail(self, client: TestClient, staff_auth_headers, sample_room, sample_guest):
        booking = client.post("/bookings", headers=staff_auth_headers,
                              json=_payload(sample_room, sample_guest)).json()

        listing = client.get("/bookings", headers=staff_auth_headers).json()
        assert [b["id"] for b in listing] == [booking["id"]]
        assert listing[0]["guest"]["last_name"] == "Lovelace"
        assert listing[0]["room"]["number"] == "101"

        detail = client.get(f"/bookings/{booking['id']}", headers=staff_auth_headers)
        assert detail.status_code == 200
        assert detail.json()["guest"]["email"] == "ada@example.com"

    def test_filter_and_recent(self, client: TestClient, staff_auth_headers, sample_room, sample_guest):
        client.post("/bookings", headers=staff_auth_headers, json=_payload(sample_room, sample_guest))

        assert len(client.get("/bookings", params={"status": "reserved"}, headers=staff_auth_headers).json()) == 1
        assert client.get("/bookings", params={"status": "checked-in"}, headers=staff_auth_headers).json() == []
        assert len(client.get("/bookings/recent", headers=staff_auth_headers).json()) == 1

    def test_today_checkins_empty(self, client: TestClient, staff_auth_headers, sample_room, sample_guest):
        client.post("/bookings", headers=staff_auth_headers, json=_payload(
            sample_room, sample_guest,
            check_in_date="2020-01-01T14:00:00", check_out_date="2020-01-02T11:00:00",
        ))
        response = client.get("/bookings/today-checkins", headers=staff_auth_headers)
        assert response.status_code == 200
        assert response.json() == []

    def test_missing_booking(self, client: TestClient, staff_auth_headers):
        assert client.get("/bookings/missing", headers=staff_auth_headers).status_code == 404


class TestCheckInOut:

    def test_full_stay(self, client: TestClient, staff_auth_headers, sample_room, sample_guest):
        booking = client.post("/bookings", headers=staff_auth_headers,
                              json=_payload(sample_room, sample_guest)).json()

        response = client.post(f"/bookings/{booking['id']}/checkin", headers=staff_auth_headers)
        assert response.status_code == 200
        assert response.json()["status"] == "checked-in"
        assert client.get(f"/rooms/{sample_room.id}", headers=staff_auth_headers).json()["status"] == "occupied"

        response = client.post(f"/bookings/{booking['id']}/checkout", headers=staff_auth_headers)
        assert response.status_code == 200
        assert response.json()["status"] == "checked-out"
        assert client.get(f"/rooms/{sample_room.id}", headers=staff_auth_headers).json()["status"] == "occupied"

    def test_check_out_before_check_in(self, client: TestClient, staff_auth_headers, sample_room, sample_guest):
        booking = client.post("/bookings", headers=staff_auth_headers,
                              json=_payload(sample_room, sample_guest)).json()

        response = client.post(f"/bookings/{booking['id']}/checkout", headers=staff_auth_headers)
        assert response.status_code == 409

    def test_check_in_twice(self, client: TestClient, staff_auth_headers, sample_room, sample_guest):
        booking = client.post("/bookings", headers=staff_auth_headers,
                              json=_payload(sample_room, sample_guest)).json()
        client.post(f"/bookings/{booking['id']}/checkin", headers=staff_auth_headers)

        response = client.post(f"/bookings/{booking['id']}/checkin", headers=staff_auth_headers)
        assert response.status_code == 409

    def test_check_in_missing_booking(self, client: TestClient, staff_auth_headers):
        response = client.post("/bookings/missing/checkin", headers=staff_auth_headers)
        assert response.status_code == 404
