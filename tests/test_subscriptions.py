"""Tests for the subscriptions API."""

import uuid

import pytest
from fastapi.testclient import TestClient

from subtrack.main import app
from tests.conftest import DEFAULT_USER_ID

HEADERS = {"X-User-Id": DEFAULT_USER_ID}


@pytest.fixture
def client():
    return TestClient(app)


def _create(client, **overrides):
    body = {"name": "Netflix", "amount": "9.99", "type": "personal"}
    body.update(overrides)
    response = client.post("/v1/subscriptions/", json=body, headers=HEADERS)
    assert response.status_code == 201, response.text
    return response.json()


class TestSubscriptionsApi:
    def test_requires_user_header(self, client):
        response = client.get("/v1/subscriptions/")
        assert response.status_code == 401

    def test_blank_user_header(self, client):
        response = client.get("/v1/subscriptions/", headers={"X-User-Id": "  "})
        assert response.status_code == 401

    def test_create(self, client):
        data = _create(
            client, renewalDate="2030-01-31", paymentMethod="Visa 4242", type="business"
        )
        assert data["status"] == "active"
        assert data["type"] == "business"
        assert data["renewalDate"] == "2030-01-31"
        assert data["paymentMethod"] == "Visa 4242"
        assert data["priceHistory"][0]["note"] == "Initial price"
        assert data["statusHistory"][0]["note"] == "Subscription created"

    def test_create_accepts_number_amount(self, client):
        data = _create(client, amount=12.5)
        assert float(data["amount"]) == 12.5

    def test_create_empty_name(self, client):
        response = client.post(
            "/v1/subscriptions/", json={"name": "", "amount": "9.99"}, headers=HEADERS
        )
        assert response.status_code == 422
        assert "Name" in response.json()["detail"]

    def test_create_zero_amount(self, client):
        response = client.post(
            "/v1/subscriptions/", json={"name": "Netflix", "amount": "0"}, headers=HEADERS
        )
        assert response.status_code == 422

    def test_create_unknown_type(self, client):
        response = client.post(
            "/v1/subscriptions/",
            json={"name": "Netflix", "amount": "9.99", "type": "family"},
            headers=HEADERS,
        )
        assert response.status_code == 422

    def test_list_and_filter(self, client):
        _create(client, name="Netflix")
        _create(client, name="Slack", type="business")

        response = client.get("/v1/subscriptions/", headers=HEADERS)
        assert response.status_code == 200
        assert [s["name"] for s in response.json()] == ["Netflix", "Slack"]

        response = client.get("/v1/subscriptions/?type=Business", headers=HEADERS)
        assert [s["name"] for s in response.json()] == ["Slack"]

    def test_list_unknown_filter(self, client):
        response = client.get("/v1/subscriptions/?type=family", headers=HEADERS)
        assert response.status_code == 422

    def test_users_do_not_see_each_other(self, client):
        _create(client)
        response = client.get("/v1/subscriptions/", headers={"X-User-Id": "someone-else"})
        assert response.json() == []

    def test_get(self, client):
        created = _create(client)
        response = client.get(f"/v1/subscriptions/{created['id']}", headers=HEADERS)
        assert response.status_code == 200
        assert response.json() == created

    def test_get_not_found(self, client):
        response = client.get(f"/v1/subscriptions/{uuid.uuid4()}", headers=HEADERS)
        assert response.status_code == 404

    def test_change_status(self, client):
        created = _create(client)
        url = f"/v1/subscriptions/{created['id']}/status"

        client.post(url, json={"status": "paused"}, headers=HEADERS)
        response = client.post(url, json={"status": "active", "note": "Back"}, headers=HEADERS)

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "active"
        assert [e["status"] for e in data["statusHistory"]] == ["active", "paused", "active"]
        assert data["statusHistory"][1]["note"] == "Status changed to paused"
        assert data["statusHistory"][2]["note"] == "Back"

    def test_change_status_invalid(self, client):
        created = _create(client)
        response = client.post(
            f"/v1/subscriptions/{created['id']}/status",
            json={"status": "archived"},
            headers=HEADERS,
        )
        assert response.status_code == 422

    def test_change_status_not_found(self, client):
        response = client.post(
            f"/v1/subscriptions/{uuid.uuid4()}/status",
            json={"status": "paused"},
            headers=HEADERS,
        )
        assert response.status_code == 404

    def test_change_price(self, client):
        created = _create(client)
        response = client.post(
            f"/v1/subscriptions/{created['id']}/price",
            json={"amount": "12.99"},
            headers=HEADERS,
        )
        assert response.status_code == 200
        data = response.json()
        assert data["amount"] == "12.99"
        assert len(data["priceHistory"]) == 2
        assert data["priceHistory"][1]["note"] == "Price updated"

    def test_change_price_invalid(self, client):
        created = _create(client)
        response = client.post(
            f"/v1/subscriptions/{created['id']}/price",
            json={"amount": "twelve"},
            headers=HEADERS,
        )
        assert response.status_code == 422

        stored = client.get(f"/v1/subscriptions/{created['id']}", headers=HEADERS).json()
        assert len(stored["priceHistory"]) == 1

    def test_change_price_not_found(self, client):
        response = client.post(
            f"/v1/subscriptions/{uuid.uuid4()}/price",
            json={"amount": "1"},
            headers=HEADERS,
        )
        assert response.status_code == 404

    def test_delete(self, client):
        created = _create(client)
        response = client.delete(f"/v1/subscriptions/{created['id']}", headers=HEADERS)
        assert response.status_code == 204

        response = client.get(f"/v1/subscriptions/{created['id']}", headers=HEADERS)
        assert response.status_code == 404

    def test_delete_unknown_is_noop(self, client):
        _create(client)
        response = client.delete(f"/v1/subscriptions/{uuid.uuid4()}", headers=HEADERS)
        assert response.status_code == 204
        assert len(client.get("/v1/subscriptions/", headers=HEADERS).json()) == 1
