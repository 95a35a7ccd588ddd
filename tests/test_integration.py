import pytest
from fastapi.testclient import TestClient

from montarota.main import create_app
from montarota.services import stores as store_service


def test_delivery_flow_end_to_end(api_client: TestClient, datastore, store, courier, make_headers):
    headers = make_headers("store", store_id=store["id"])

    created = api_client.post(
        "/api/orders",
        json={"customer_address": "Rua A, 123", "customer_name": "Ana", "preparation_minutes": 10},
        headers=headers,
    )
    assert created.status_code == 201
    order = created.json()
    assert order["store_id"] == store["id"]
    assert order["status"] == "pending"
    code = order["confirmation_code"]

    assembled = api_client.post(
        "/api/routes/assemble",
        json={"courier_id": courier["id"], "order_ids": [order["id"]]},
        headers=headers,
    )
    assert assembled.status_code == 201
    payload = assembled.json()
    assert payload["google_maps_link"] == "https://www.google.com/maps/dir/Av.%20Paulista%2C%201000/Rua%20A%2C%20123"
    assert payload["orders"][0]["confirmation_code"] == code

    gps = api_client.patch(f"/api/couriers/{courier['id']}/gps", json={"lat": -23.56, "lng": -46.65})
    assert gps.status_code == 200
    assert gps.json() == {"ok": True}

    confirmed = api_client.post(f"/api/orders/{order['id']}/confirm", json={"code": code})
    assert confirmed.status_code == 200
    assert confirmed.json()["order"]["status"] == "delivered"

    again = api_client.post(f"/api/orders/{order['id']}/confirm", json={"code": code})
    assert again.status_code == 400
    assert again.json() == {"error": "Order already confirmed"}

    stored = datastore.couriers.get(courier["id"])
    assert stored["total_deliveries"] == 1
    assert stored["balance"] == pytest.approx(4.5)
    assert stored["current_lat"] == -23.56

    track = api_client.get(f"/api/tracking/courier/{courier['id']}", headers=headers)
    assert track.status_code == 200
    assert len(track.json()) == 1


def test_confirm_with_wrong_code(api_client, store, admin_headers):
    order = api_client.post(
        "/api/orders", json={"customer_address": "Rua A", "store_id": store["id"]}, headers=admin_headers
    ).json()
    wrong = "000000" if order["confirmation_code"] != "000000" else "111111"

    response = api_client.post(f"/api/orders/{order['id']}/confirm", json={"code": wrong})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid confirmation code"}


def test_protected_endpoints_require_token(api_client):
    response = api_client.get("/api/orders")
    assert response.status_code == 401
    assert response.json() == {"error": "Token not provided"}

    response = api_client.get("/api/orders", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401


def test_unknown_route_returns_json_404(api_client):
    response = api_client.get("/api/nowhere")
    assert response.status_code == 404
    assert response.json() == {"error": "route not found"}


def test_missing_record_returns_404(api_client, admin_headers):
    response = api_client.get("/api/orders/missing", headers=admin_headers)
    assert response.status_code == 404
    assert response.json() == {"error": "Order not found"}


def test_unknown_body_field_is_rejected(api_client, admin_headers):
    response = api_client.post(
        "/api/orders", json={"customer_address": "Rua A", "discount": 10}, headers=admin_headers
    )
    assert response.status_code == 400
    assert "discount" in response.json()["error"]


def test_gps_without_coordinates(api_client, courier):
    response = api_client.patch(f"/api/couriers/{courier['id']}/gps", json={"lat": -23.5})
    assert response.status_code == 400
    assert response.json() == {"error": "Both lat and lng are required"}


def test_unexpected_errors_are_redacted(api_client, admin_headers, monkeypatch):
    def boom(datastore):
        raise RuntimeError("password=hunter2")

    monkeypatch.setattr(store_service, "list_stores", boom)

    response = api_client.get("/api/stores", headers=admin_headers)

    assert response.status_code == 500
    assert response.json() == {"error": "internal server error"}


def test_invalid_status_value(api_client, store, admin_headers):
    order = api_client.post(
        "/api/orders", json={"customer_address": "Rua A", "store_id": store["id"]}, headers=admin_headers
    ).json()

    response = api_client.patch(f"/api/orders/{order['id']}/status", json={"status": "shipped"}, headers=admin_headers)

    assert response.status_code == 400


def test_weekly_settlement_and_payment(api_client, datastore, store, admin_headers):
    datastore.orders.insert(
        {"store_id": store["id"], "status": "delivered", "platform_fee": 4.5, "created_at": "2026-10-14T12:00:00+00:00"}
    )

    generated = api_client.post(
        "/api/payments/generate-weekly",
        json={"store_id": store["id"], "period_start": "2026-10-13", "period_end": "2026-10-19"},
        headers=admin_headers,
    )
    assert generated.status_code == 201
    assert generated.json()["message"] == "1 deliveries = R$ 4.50"

    paid = api_client.patch(
        f"/api/payments/{generated.json()['id']}/pay", json={"payment_method": "pix"}, headers=admin_headers
    )
    assert paid.status_code == 200
    assert paid.json()["payment"]["status"] == "paid"


def test_analytics_summary_endpoint(api_client, datastore, store, admin_headers):
    datastore.orders.insert({"store_id": store["id"], "status": "delivered", "customer_neighborhood": "Moema"})

    response = api_client.get(f"/api/analytics/summary/{store['id']}", headers=admin_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["today"]["total_orders"] == 1
    assert body["suggestion"] == "Focus marketing on the Moema neighborhood"


def test_register_and_login_over_http(api_client, admin_headers):
    body = {"name": "Ana", "email": "ana@example.com", "password": "pw", "role": "admin"}
    anonymous = api_client.post("/api/auth/register", json=body)
    assert anonymous.status_code == 401

    registered = api_client.post("/api/auth/register", json=body, headers=admin_headers)
    assert registered.status_code == 201

    login = api_client.post("/api/auth/login", json={"email": "ana@example.com", "password": "pw"})
    assert login.status_code == 200
    token = login.json()["token"]

    response = api_client.get("/api/couriers", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200

    failed = api_client.post("/api/auth/login", json={"email": "ana@example.com", "password": "nope"})
    assert failed.status_code == 401


def test_ocr_ingest_uses_caller_store(api_client, store, make_headers):
    response = api_client.post(
        "/api/ocr/ingest",
        json={"raw_text": "Tel: (11) 98765-4321 TOTAL R$ 45,90"},
        headers=make_headers("store", store_id=store["id"]),
    )

    assert response.status_code == 201
    assert response.json()["store_id"] == store["id"]
    assert response.json()["order_value"] == pytest.approx(45.9)


def test_health_reports_missing_datastore():
    client = TestClient(create_app(), raise_server_exceptions=False)

    assert client.get("/api/health").json()["status"] == "ok"
    assert client.get("/").json()["status"] == "online"
