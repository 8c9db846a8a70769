"""Unit tests for the HTTP surface (webhooks, payments, schedules)."""

import pytest
from fastapi.testclient import TestClient

from cloudpay_connect.exceptions import ProviderError
from cloudpay_connect.main import app
from cloudpay_connect.routers.dependencies import get_adapter


@pytest.fixture
def client(adapter):
    app.dependency_overrides[get_adapter] = lambda: adapter
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def test_health(client) -> None:
    assert client.get("/health").json() == {"status": "ok"}


class TestNotificationWebhook:

    def test_form_encoded_pay_notification(self, client, adapter, protocol) -> None:
        resp = client.post(
            "/provider/cloudpayments/pay",
            data={
                "TransactionId": "1211506522",
                "Amount": "10.00",
                "InvoiceId": "order-77",
                "Status": "Completed",
                "Data": '{"PaymentId": "pay-77"}',
            },
        )

        assert resp.status_code == 200
        assert resp.json() == {"code": 0}
        assert adapter.get_order_id() == "order-77"
        assert adapter.get_payment_id() == "pay-77"
        assert protocol.methods() == ["get_notification_response"]

    def test_json_check_notification(self, client, adapter) -> None:
        resp = client.post("/provider/cloudpayments/check", json={"InvoiceId": "order-1", "Amount": 5})

        assert resp.json() == {"code": 0}
        assert adapter.get_amount() == 5.0

    def test_invalid_json(self, client) -> None:
        resp = client.post(
            "/provider/cloudpayments/pay",
            content=b"{broken",
            headers={"Content-Type": "application/json"},
        )

        assert resp.status_code == 400

    def test_form_body_with_invalid_utf8(self, client, protocol) -> None:
        resp = client.post(
            "/provider/cloudpayments/pay",
            content=b"InvoiceId=\xff\xfe",
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )

        assert resp.status_code == 400
        assert resp.json()["detail"] == "Invalid form body"
        assert protocol.calls == []

    def test_unknown_notification_type(self, client, protocol) -> None:
        resp = client.post("/provider/cloudpayments/payout", data={"InvoiceId": "x"})

        assert resp.status_code == 404
        assert protocol.calls == []


class TestPaymentEndpoints:

    def test_pay_returns_transport_url(self, client, protocol) -> None:
        resp = client.post(
            "/pay",
            json={
                "order_id": "order-1",
                "payment_id": "pay-1",
                "amount": 100.0,
                "extra_params": {"checkout": "cryptogram", "cardholder_name": "CARD HOLDER"},
            },
        )

        assert resp.status_code == 200
        assert resp.json() == {"url": "https://3ds.example.com/acs", "need_form": False}
        assert protocol.calls[0][1]["InvoiceId"] == "order-1"

    def test_pay_missing_params_is_bad_request(self, client, protocol) -> None:
        resp = client.post("/pay", json={"order_id": "o", "payment_id": "p", "amount": 1.0})

        assert resp.status_code == 400
        assert "checkout" in resp.json()["detail"]
        assert protocol.calls == []

    def test_pay_null_checkout_is_bad_request(self, client, protocol) -> None:
        resp = client.post(
            "/pay",
            json={
                "order_id": "o",
                "payment_id": "p",
                "amount": 1.0,
                "extra_params": {"checkout": None, "cardholder_name": "CARD HOLDER"},
            },
        )

        assert resp.status_code == 400
        assert "checkout" in resp.json()["detail"]
        assert protocol.calls == []

    def test_pay_provider_decline_is_bad_gateway(self, client, protocol) -> None:
        async def declined(request):
            raise ProviderError("Insufficient funds")

        protocol.get_payment_url = declined

        resp = client.post(
            "/pay",
            json={
                "order_id": "o",
                "payment_id": "p",
                "amount": 1.0,
                "extra_params": {"checkout": "c", "cardholder_name": "n"},
            },
        )

        assert resp.status_code == 502
        assert resp.json()["detail"] == "Insufficient funds"

    def test_pay_by_token(self, client, protocol) -> None:
        protocol.token_response = {
            "Success": True,
            "Model": {"TransactionId": 7, "Status": "Completed", "InvoiceId": "o-7", "Amount": 3.0},
        }

        resp = client.post(
            "/pay/token",
            json={"token": "tk", "amount": 3.0, "account_id": "user@example.com", "order_id": "o-7"},
        )

        body = resp.json()
        assert resp.status_code == 200
        assert body["success"] is True
        assert body["status"] == "Completed"
        assert body["transaction_id"] == "7"
        assert body["order_id"] == "o-7"
        assert body["amount"] == 3.0

    def test_options(self, client) -> None:
        assert client.get("/options").json() == [
            {"type": "string", "label": "Public Id", "alias": "publicId"},
            {"type": "string", "label": "Secret key", "alias": "secretKey"},
        ]


class TestScheduleEndpoints:

    def test_create_then_update(self, client, protocol) -> None:
        payload = {"account_id": "user@example.com", "amount": 1.0, "currency": "RUB", "period": "Month", "interval": 1}

        created = client.post("/schedules", json=payload).json()
        updated = client.post("/schedules", json={**payload, "id": created["id"]}).json()

        assert created == {"id": protocol.schedule_id}
        assert updated == created
        assert protocol.methods() == ["create_schedule", "update_schedule"]

    def test_get_and_list(self, client, protocol, subscription_model) -> None:
        protocol.schedules = [subscription_model]

        one = client.get(f"/schedules/{subscription_model['Id']}").json()
        many = client.get("/schedules", params={"account_id": "user@example.com"}).json()

        assert one["id"] == subscription_model["Id"]
        assert one["period"] == "Month"
        assert [s["id"] for s in many] == [subscription_model["Id"]]
        assert protocol.calls[-1] == ("get_schedule_list", "user@example.com")

    def test_delete(self, client, protocol) -> None:
        resp = client.delete("/schedules/sc_1")

        assert resp.json() == {"id": "sc_1", "removed": True}
        assert protocol.calls == [("remove_schedule", "sc_1")]
