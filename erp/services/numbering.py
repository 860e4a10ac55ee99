"""Document number generators.

All numbers embed the UTC calendar date as ``YYYYMMDD``:

* purchase orders: ``20250923-k3x9qa`` (six random base36 characters)
* goods receipts: ``GR-20250923-20250923-k3x9qa``
* supplier invoices: ``INV-20250923``
* warehouse transfers: ``TRANSFER-1758585600000`` (epoch milliseconds)
"""

import secrets
import string
from datetime import datetime, timezone as dt_timezone
from typing import Optional

from django.utils import timezone

BASE36_ALPHABET = string.digits + string.ascii_lowercase
PO_SUFFIX_LENGTH = 6
PO_NUMBER_PATTERN = r"^\d{8}-[a-z0-9]{6}$"


def _utc_now(now: Optional[datetime] = None) -> datetime:
    now = now or timezone.now()
    if timezone.is_naive(now):
        return now.replace(tzinfo=dt_timezone.utc)
    return now.astimezone(dt_timezone.utc)


def date_part(now: Optional[datetime] = None) -> str:
    return _utc_now(now).strftime("%Y%m%d")


def generate_po_number(now: Optional[datetime] = None) -> str:
    suffix = "".join(secrets.choice(BASE36_ALPHABET) for _ in range(PO_SUFFIX_LENGTH))
    return f"{date_part(now)}-{suffix}"


def generate_gr_number(po_number: str, now: Optional[datetime] = None) -> str:
    return f"GR-{date_part(now)}-{po_number}"


def generate_invoice_number(now: Optional[datetime] = None) -> str:
    return f"INV-{date_part(now)}"


def epoch_millis(now: Optional[datetime] = None) -> int:
    return int(_utc_now(now).timestamp() * 1000)


def format_transfer_reference(millis: int) -> str:
    return f"TRANSFER-{millis}"
