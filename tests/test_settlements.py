from datetime import date

import pytest

from montarota.errors import ConflictError, NotFoundError, ValidationError
from montarota.services.settlements import service


def _delivered(datastore, store, created_at, fee=4.5):
    return datastore.orders.insert(
        {"store_id": store["id"], "status": "delivered", "platform_fee": fee, "created_at": created_at}
    )


def test_total_fees_falls_back_to_fixed_fee():
    assert service.total_fees([{"platform_fee": 4.5}, {"platform_fee": None}, {}]) == pytest.approx(13.5)
    assert service.total_fees([]) == 0.0


def test_generate_weekly_counts_delivered_orders_in_period(datastore, store):
    for day in range(13, 20):
        _delivered(datastore, store, f"2026-10-{day:02d}T12:00:00+00:00")
    _delivered(datastore, store, "2026-10-12T23:59:59+00:00")
    _delivered(datastore, store, "2026-10-20T00:00:00+00:00")
    datastore.orders.insert({"store_id": store["id"], "status": "cancelled", "created_at": "2026-10-14T12:00:00+00:00"})
    other = datastore.stores.insert({"name": "Outra"})
    _delivered(datastore, other, "2026-10-14T12:00:00+00:00")

    payment = service.generate_weekly(datastore, store["id"], date(2026, 10, 13), date(2026, 10, 19))

    assert payment["total_deliveries"] == 7
    assert payment["gross_amount"] == pytest.approx(31.5)
    assert payment["net_amount"] == pytest.approx(31.5)
    assert payment["type"] == "store_to_platform"
    assert payment["status"] == "pending"
    assert payment["period_start"] == "2026-10-13"
    assert payment["message"] == "7 deliveries = R$ 31.50"
    assert len(datastore.payments.select()) == 1


def test_generate_weekly_empty_period(datastore, store):
    payment = service.generate_weekly(datastore, store["id"], date(2026, 1, 5), date(2026, 1, 11))

    assert payment["total_deliveries"] == 0
    assert payment["gross_amount"] == 0.0
    assert payment["message"] == "0 deliveries = R$ 0.00"


def test_generate_weekly_rejects_inverted_period(datastore, store):
    with pytest.raises(ValidationError):
        service.generate_weekly(datastore, store["id"], date(2026, 10, 19), date(2026, 10, 13))


def test_mark_paid(datastore, store):
    payment = service.generate_weekly(datastore, store["id"], date(2026, 10, 13), date(2026, 10, 19))

    result = service.mark_paid(datastore, payment["id"], "pix", "https://example.com/receipt.pdf")

    assert result["message"] == "Payment recorded"
    assert result["payment"]["status"] == "paid"
    assert result["payment"]["payment_method"] == "pix"
    assert result["payment"]["paid_at"]

    with pytest.raises(ConflictError):
        service.mark_paid(datastore, payment["id"], "pix")


def test_mark_paid_missing_payment(datastore):
    with pytest.raises(NotFoundError):
        service.mark_paid(datastore, "missing", "pix")


def test_list_payments_filters_by_store_and_status(datastore, store):
    other = datastore.stores.insert({"name": "Outra"})
    mine = service.generate_weekly(datastore, store["id"], date(2026, 10, 13), date(2026, 10, 19))
    service.generate_weekly(datastore, other["id"], date(2026, 10, 13), date(2026, 10, 19))

    assert [item["id"] for item in service.list_payments(datastore, store_id=store["id"])] == [mine["id"]]
    assert service.list_payments(datastore, store_id=store["id"], status="paid") == []
