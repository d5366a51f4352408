"""
Spa Booking API - Simulated Payment Endpoint Tests
===================================================

What we test:
    ✅ Initiate answers after the configured delay with a TXN id and "pending"
    ✅ Initiate rejects missing fields without waiting
    ✅ Concurrent initiates do not queue behind each other
    ✅ Confirm flips payment_status to "completed"
    ✅ Confirm on an unknown booking → 404 and no row changes
"""

import asyncio
import re
import time

import pytest

from spa_booking.config import settings

TXN_PATTERN = re.compile(r"^TXN-\d+-[0-9a-zA-Z]+$")


class TestInitiatePayment:

    @pytest.mark.asyncio
    async def test_initiate_returns_pending_transaction(self, test_client):
        started = time.perf_counter()
        response = await test_client.post(
            "/api/payments/initiate",
            json={"amount": "$50", "serviceName": "Massage", "bookingId": "1"},
        )
        elapsed = time.perf_counter() - started

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "pending"
        assert TXN_PATTERN.match(body["transactionId"])
        assert body["qrCodeUrl"].startswith(settings.payment_qr_base_url)
        assert "amount=50" in body["qrCodeUrl"]
        assert "bookingId=1" in body["qrCodeUrl"]
        assert "Scan QR" in body["message"]
        # loop clocks may wake a hair early
        assert elapsed >= settings.payment_delay_seconds * 0.9

    @pytest.mark.asyncio
    async def test_transaction_ids_differ_per_request(self, test_client):
        payload = {"amount": 50, "serviceName": "Massage", "bookingId": 1}

        first = (await test_client.post("/api/payments/initiate", json=payload)).json()
        second = (await test_client.post("/api/payments/initiate", json=payload)).json()

        assert first["transactionId"] != second["transactionId"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("missing", ["amount", "serviceName", "bookingId"])
    async def test_missing_field_rejected(self, test_client, missing):
        payload = {"amount": "$50", "serviceName": "Massage", "bookingId": "1"}
        del payload[missing]

        response = await test_client.post("/api/payments/initiate", json=payload)

        assert response.status_code == 400
        assert response.json()["details"]["missing_fields"] == [missing]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field", ["amount", "bookingId"])
    async def test_numeric_zero_counts_as_missing(self, test_client, field):
        payload = {"amount": 50, "serviceName": "Massage", "bookingId": 1}
        payload[field] = 0

        response = await test_client.post("/api/payments/initiate", json=payload)

        assert response.status_code == 400
        assert response.json()["details"]["missing_fields"] == [field]

    @pytest.mark.asyncio
    async def test_concurrent_initiates_wait_in_parallel(self, test_client):
        payload = {"amount": "$50", "serviceName": "Massage", "bookingId": "1"}
        started = time.perf_counter()

        responses = await asyncio.gather(
            *(test_client.post("/api/payments/initiate", json=payload) for _ in range(5))
        )
        elapsed = time.perf_counter() - started

        assert all(r.status_code == 200 for r in responses)
        # five sequential waits would take 5x the delay
        assert elapsed < settings.payment_delay_seconds * 3


class TestConfirmPayment:

    @pytest.mark.asyncio
    async def test_confirm_marks_booking_completed(self, test_client, booking_payload):
        booking_id = (await test_client.post("/booking_spa12", json=booking_payload)).json()["id"]

        response = await test_client.post(
            "/api/payments/confirm", json={"bookingId": str(booking_id)}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == f"Payment for booking ID {booking_id} confirmed successfully."
        assert body["booking"]["id"] == booking_id
        assert body["booking"]["payment_status"] == "completed"

        listed = (await test_client.get("/booking_spa12")).json()
        assert listed[0]["payment_status"] == "completed"

    @pytest.mark.asyncio
    async def test_confirm_unknown_booking_is_404_and_changes_nothing(
        self, test_client, booking_payload
    ):
        booking_id = (await test_client.post("/booking_spa12", json=booking_payload)).json()["id"]

        response = await test_client.post(
            "/api/payments/confirm", json={"bookingId": booking_id + 1000}
        )

        assert response.status_code == 404
        assert "not found for payment confirmation" in response.json()["message"]
        listed = (await test_client.get("/booking_spa12")).json()
        assert [b["payment_status"] for b in listed] == [None]

    @pytest.mark.asyncio
    async def test_confirm_without_booking_id_is_400(self, test_client):
        response = await test_client.post("/api/payments/confirm", json={})

        assert response.status_code == 400
        assert response.json()["details"]["missing_fields"] == ["bookingId"]

    @pytest.mark.asyncio
    async def test_confirm_zero_booking_id_is_missing(self, test_client):
        response = await test_client.post("/api/payments/confirm", json={"bookingId": 0})

        assert response.status_code == 400
        assert response.json()["details"]["missing_fields"] == ["bookingId"]

    @pytest.mark.asyncio
    async def test_confirm_accepts_issued_transaction_id(self, test_client, booking_payload):
        booking_id = (await test_client.post("/booking_spa12", json=booking_payload)).json()["id"]
        initiated = (
            await test_client.post(
                "/api/payments/initiate",
                json={"amount": "$45", "serviceName": "Massage", "bookingId": booking_id},
            )
        ).json()

        response = await test_client.post(
            "/api/payments/confirm",
            json={"bookingId": booking_id, "transactionId": initiated["transactionId"]},
        )

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_confirm_rejects_malformed_transaction_id(self, test_client, booking_payload):
        booking_id = (await test_client.post("/booking_spa12", json=booking_payload)).json()["id"]

        response = await test_client.post(
            "/api/payments/confirm",
            json={"bookingId": booking_id, "transactionId": "not-a-txn"},
        )

        assert response.status_code == 400
        assert response.json()["details"]["field"] == "transactionId"
