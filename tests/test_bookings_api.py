"""
Spa Booking API - Booking Endpoint Tests
=========================================

What:  End-to-end tests for /booking_spa12 against an in-memory store.

What we test:
    ✅ Create-then-list round trip keeps every field, assigns an id
    ✅ Any missing required field → 400, nothing inserted
    ✅ Price normalization ("$1,250.50" → 1250.5)
    ✅ List order: latest appointment first
    ✅ Delete: 200 once, 404 afterwards and for unknown ids
"""

import pytest

from spa_booking.schemas.booking import BOOKING_REQUIRED_FIELDS


class TestCreateAndListBookings:

    @pytest.mark.asyncio
    async def test_create_then_list_round_trip(self, test_client, booking_payload):
        created = await test_client.post("/booking_spa12", json=booking_payload)

        assert created.status_code == 201
        booking = created.json()
        assert isinstance(booking["id"], int)
        assert booking["service"] == "Swedish Massage"
        assert booking["duration"] == "60 min"
        assert booking["price"] == 45.0
        assert booking["name"] == "Jane Doe"
        assert booking["phone"] == "+1 555 0100"
        assert booking["datetime"] == "2025-07-10T14:00:00"
        assert booking["payment_status"] is None

        listed = await test_client.get("/booking_spa12")
        assert listed.status_code == 200
        assert listed.json() == [booking]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("missing", BOOKING_REQUIRED_FIELDS)
    async def test_missing_field_rejected_without_insert(
        self, test_client, booking_payload, missing
    ):
        del booking_payload[missing]

        response = await test_client.post("/booking_spa12", json=booking_payload)

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        assert body["message"].startswith("All booking fields are required.")
        assert body["details"]["missing_fields"] == [missing]

        listed = await test_client.get("/booking_spa12")
        assert listed.json() == []

    @pytest.mark.asyncio
    async def test_empty_string_counts_as_missing(self, test_client, booking_payload):
        booking_payload["name"] = ""

        response = await test_client.post("/booking_spa12", json=booking_payload)

        assert response.status_code == 400
        assert response.json()["details"]["missing_fields"] == ["name"]

    @pytest.mark.asyncio
    async def test_every_missing_field_is_listed(self, test_client):
        response = await test_client.post("/booking_spa12", json={"service": "Facial"})

        assert response.status_code == 400
        assert response.json()["details"]["missing_fields"] == [
            "duration", "price", "name", "phone", "datetime",
        ]

    @pytest.mark.asyncio
    async def test_price_with_symbols_and_separators(self, test_client, booking_payload):
        booking_payload["price"] = "$1,250.50"

        response = await test_client.post("/booking_spa12", json=booking_payload)

        assert response.status_code == 201
        assert response.json()["price"] == 1250.50

    @pytest.mark.asyncio
    async def test_numeric_price_accepted(self, test_client, booking_payload):
        booking_payload["price"] = 80

        response = await test_client.post("/booking_spa12", json=booking_payload)

        assert response.status_code == 201
        assert response.json()["price"] == 80.0

    @pytest.mark.asyncio
    async def test_numeric_zero_price_counts_as_missing(self, test_client, booking_payload):
        booking_payload["price"] = 0

        response = await test_client.post("/booking_spa12", json=booking_payload)

        assert response.status_code == 400
        assert response.json()["details"]["missing_fields"] == ["price"]

    @pytest.mark.asyncio
    async def test_sub_cent_price_matches_listed_row(self, test_client, booking_payload):
        booking_payload["price"] = "$45.678"

        created = await test_client.post("/booking_spa12", json=booking_payload)

        assert created.status_code == 201
        assert created.json()["price"] == 45.68
        listed = (await test_client.get("/booking_spa12")).json()
        assert listed == [created.json()]

    @pytest.mark.asyncio
    async def test_price_without_digits_rejected(self, test_client, booking_payload):
        booking_payload["price"] = "free"

        response = await test_client.post("/booking_spa12", json=booking_payload)

        assert response.status_code == 400
        assert response.json()["details"]["field"] == "price"

    @pytest.mark.asyncio
    async def test_unparseable_datetime_rejected(self, test_client, booking_payload):
        booking_payload["datetime"] = "next tuesday"

        response = await test_client.post("/booking_spa12", json=booking_payload)

        assert response.status_code == 400
        assert response.json()["details"]["field"] == "datetime"

    @pytest.mark.asyncio
    async def test_offset_datetime_stored_as_utc(self, test_client, booking_payload):
        booking_payload["datetime"] = "2025-07-10T16:00:00+02:00"

        response = await test_client.post("/booking_spa12", json=booking_payload)

        assert response.status_code == 201
        assert response.json()["datetime"] == "2025-07-10T14:00:00"

    @pytest.mark.asyncio
    async def test_malformed_json_body_is_400(self, test_client):
        response = await test_client.post(
            "/booking_spa12",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    @pytest.mark.asyncio
    async def test_list_orders_latest_appointment_first(self, test_client, booking_payload):
        for slot in ("2025-07-01T09:00:00", "2025-07-20T09:00:00", "2025-07-10T09:00:00"):
            booking_payload["datetime"] = slot
            assert (await test_client.post("/booking_spa12", json=booking_payload)).status_code == 201

        listed = (await test_client.get("/booking_spa12")).json()

        assert [b["datetime"] for b in listed] == [
            "2025-07-20T09:00:00",
            "2025-07-10T09:00:00",
            "2025-07-01T09:00:00",
        ]


class TestDeleteBooking:

    @pytest.mark.asyncio
    async def test_delete_unknown_id_is_404(self, test_client):
        response = await test_client.delete("/booking_spa12/999999")

        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "not_found"
        assert body["message"] == "Booking with ID 999999 not found."

    @pytest.mark.asyncio
    async def test_delete_existing_then_again(self, test_client, booking_payload):
        booking_id = (await test_client.post("/booking_spa12", json=booking_payload)).json()["id"]

        first = await test_client.delete(f"/booking_spa12/{booking_id}")
        assert first.status_code == 200
        assert first.json() == {"message": f"Booking with ID {booking_id} deleted successfully."}
        assert (await test_client.get("/booking_spa12")).json() == []

        second = await test_client.delete(f"/booking_spa12/{booking_id}")
        assert second.status_code == 404

    @pytest.mark.asyncio
    async def test_non_integer_id_is_400(self, test_client):
        response = await test_client.delete("/booking_spa12/abc")

        assert response.status_code == 400


class TestCrossCutting:

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, test_client):
        response = await test_client.get("/booking_spa12", headers={"X-Request-ID": "abc12345"})

        assert response.headers["X-Request-ID"] == "abc12345"

    @pytest.mark.asyncio
    async def test_empty_request_id_header_gets_generated_id(self, test_client):
        response = await test_client.get("/booking_spa12", headers={"X-Request-ID": ""})

        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_cors_allows_any_origin(self, test_client):
        response = await test_client.get(
            "/booking_spa12", headers={"Origin": "https://spa.example.com"}
        )

        assert response.headers["access-control-allow-origin"] == "*"

    @pytest.mark.asyncio
    async def test_health_reports_connected_store(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
