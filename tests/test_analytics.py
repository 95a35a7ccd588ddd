from datetime import timedelta

import pytest

from montarota.services.analytics import summarize, top_neighborhoods
from montarota.services.timeutils import start_of_day, utc_now


def _delivered(datastore, store, neighborhood, created_at=None, fee=4.5):
    values = {"store_id": store["id"], "status": "delivered", "platform_fee": fee, "customer_neighborhood": neighborhood}
    if created_at is not None:
        values["created_at"] = created_at
    return datastore.orders.insert(values)


def test_top_neighborhoods_ranks_by_count_and_keeps_first_seen_on_ties():
    orders = [{"customer_neighborhood": name} for name in ["Centro", "Moema", "Moema", "Pinheiros", "Centro", "Lapa"]]
    orders.append({"customer_neighborhood": None})
    orders.append({"customer_neighborhood": "  "})

    ranked = top_neighborhoods(orders)

    assert ranked == [
        {"neighborhood": "Centro", "total": 2},
        {"neighborhood": "Moema", "total": 2},
        {"neighborhood": "Pinheiros", "total": 1},
        {"neighborhood": "Lapa", "total": 1},
    ]


def test_top_neighborhoods_keeps_five():
    orders = [{"customer_neighborhood": f"Bairro {index}"} for index in range(8)]
    assert len(top_neighborhoods(orders)) == 5


def test_summary_splits_today_and_month(datastore, store):
    _delivered(datastore, store, "Moema")
    _delivered(datastore, store, "Moema")
    _delivered(datastore, store, "Centro")
    yesterday = (utc_now() - timedelta(days=1)).isoformat()
    _delivered(datastore, store, "Lapa", created_at=yesterday)
    last_month = (start_of_day(utc_now().date().replace(day=1)) - timedelta(hours=1)).isoformat()
    _delivered(datastore, store, "Lapa", created_at=last_month)
    datastore.orders.insert({"store_id": store["id"], "status": "pending", "customer_neighborhood": "Lapa"})
    other = datastore.stores.insert({"name": "Outra"})
    _delivered(datastore, other, "Lapa")

    summary = summarize(datastore, store["id"])

    assert summary["today"] == {"total_orders": 3, "fee_revenue": pytest.approx(13.5)}
    assert summary["month"]["total_orders"] in (3, 4)
    assert summary["top_neighborhoods"][0] == {"neighborhood": "Moema", "total": 2}
    assert summary["suggestion"] == "Focus marketing on the Moema neighborhood"


def test_summary_without_data(datastore, store):
    summary = summarize(datastore, store["id"])

    assert summary["today"] == {"total_orders": 0, "fee_revenue": 0.0}
    assert summary["month"] == {"total_orders": 0, "fee_revenue": 0.0}
    assert summary["top_neighborhoods"] == []
    assert summary["suggestion"] == "No data yet"
