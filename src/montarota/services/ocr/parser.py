"""Receipt-slip ingestion.

No image recognition happens here: the client sends the text it read from
the slip and the fields below are pulled out with regular expressions for a
human to review.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Optional

from ...persistence.datastore import Datastore

logger = logging.getLogger(__name__)

PHONE_PATTERN = re.compile(r"(?<!\d)\(?\d{2}\)?\s?\d{4,5}[-\s]?\d{4}(?!\d)")
POSTAL_CODE_PATTERN = re.compile(r"(?<!\d)\d{5}-?\d{3}(?!\d)")
AMOUNT_PATTERN = re.compile(r"R\$\s?(\d{1,3}(?:\.\d{3})+,\d{2}|\d+[.,]\d{2})")

DEFAULT_CONFIDENCE = 0.75


def _parse_amount(raw: str) -> float:
    if "," in raw:
        raw = raw.replace(".", "").replace(",", ".")
    return float(raw)


def extract_fields(text: Optional[str]) -> dict[str, Any]:
    text = text or ""
    phone = PHONE_PATTERN.search(text)
    postal_code = POSTAL_CODE_PATTERN.search(text)
    amount = AMOUNT_PATTERN.search(text)
    return {
        "customer_phone": phone.group(0) if phone else None,
        "customer_postal_code": postal_code.group(0) if postal_code else None,
        "order_value": _parse_amount(amount.group(1)) if amount else None,
    }


def ingest(datastore: Datastore, *, store_id: Any, photo_ref: Optional[str], raw_text: Optional[str]) -> dict:
    fields = extract_fields(raw_text)
    slip = datastore.ocr_slips.insert(
        {
            "store_id": store_id,
            "photo_url": photo_ref or "pending",
            "raw_text": raw_text,
            **fields,
            "ocr_confidence": DEFAULT_CONFIDENCE,
            "confirmed": False,
        }
    )
    found = [name for name, value in fields.items() if value is not None]
    logger.info(f"Slip {slip['id']} ingested for store {store_id}; extracted {found or 'nothing'}")
    return {**slip, "message": "Slip processed, please review the extracted data"}
