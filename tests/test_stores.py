import pytest

from montarota.errors import NotFoundError, ValidationError
from montarota.services import stores


def test_create_store_defaults(datastore):
    store = stores.create_store(datastore, {"name": " Padaria ", "address": "Rua C, 10", "platform_fee": None})

    assert store["name"] == "Padaria"
    assert store["platform_fee"] == 4.5
    assert store["status"] == "active"


def test_create_store_requires_name(datastore):
    with pytest.raises(ValidationError):
        stores.create_store(datastore, {"name": "  "})


def test_list_stores_only_active_by_name(datastore):
    stores.create_store(datastore, {"name": "Zeta"})
    alpha = stores.create_store(datastore, {"name": "Alpha"})
    closed = stores.create_store(datastore, {"name": "Beta"})
    stores.update_store(datastore, closed["id"], {"status": "inactive"})

    assert [store["name"] for store in stores.list_stores(datastore)] == ["Alpha", "Zeta"]
    assert stores.get_store(datastore, alpha["id"])["name"] == "Alpha"


def test_update_store(datastore, store):
    updated = stores.update_store(datastore, store["id"], {"phone": "1133334444"})
    assert updated["phone"] == "1133334444"

    with pytest.raises(ValidationError):
        stores.update_store(datastore, store["id"], {})
    with pytest.raises(NotFoundError):
        stores.update_store(datastore, "missing", {"phone": "1"})
    with pytest.raises(NotFoundError):
        stores.get_store(datastore, "missing")


def test_store_endpoints(api_client, admin_headers):
    created = api_client.post("/api/stores", json={"name": "Mercado", "address": "Rua D, 1"}, headers=admin_headers)
    assert created.status_code == 201

    response = api_client.put(
        f"/api/stores/{created.json()['id']}", json={"status": "inactive"}, headers=admin_headers
    )
    assert response.status_code == 200
    assert api_client.get("/api/stores", headers=admin_headers).json() == []

    invalid = api_client.put(f"/api/stores/{created.json()['id']}", json={"status": "closed"}, headers=admin_headers)
    assert invalid.status_code == 400
