import pytest

from montarota.services.ocr import extract_fields, ingest

SLIP = """PIZZARIA CENTRAL
Cliente: Maria Souza
Tel: (11) 98765-4321
Rua das Flores, 45 - CEP 01310-100
TOTAL R$ 1.234,56
"""


def test_extract_fields_from_slip_text():
    fields = extract_fields(SLIP)

    assert fields["customer_phone"] == "(11) 98765-4321"
    assert fields["customer_postal_code"] == "01310-100"
    assert fields["order_value"] == pytest.approx(1234.56)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Total R$ 45,90", 45.90),
        ("Total R$45.90", 45.90),
        ("sem valor", None),
    ],
)
def test_extract_amount_formats(text, expected):
    assert extract_fields(text)["order_value"] == (pytest.approx(expected) if expected is not None else None)


def test_postal_code_not_taken_from_longer_number():
    assert extract_fields("Pedido 123456789012")["customer_postal_code"] is None


def test_extract_fields_empty_text():
    assert extract_fields(None) == {"customer_phone": None, "customer_postal_code": None, "order_value": None}


def test_ingest_stores_slip_for_review(datastore, store):
    slip = ingest(datastore, store_id=store["id"], photo_ref=None, raw_text=SLIP)

    assert slip["photo_url"] == "pending"
    assert slip["confirmed"] is False
    assert slip["ocr_confidence"] == 0.75
    assert slip["order_value"] == pytest.approx(1234.56)
    assert slip["message"] == "Slip processed, please review the extracted data"
    assert datastore.ocr_slips.get(slip["id"])["raw_text"] == SLIP
