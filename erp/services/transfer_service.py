"""Warehouse-to-warehouse item transfers.

A transfer is a stock-out at the source and a stock-in at the destination
sharing one ``TRANSFER-{epoch_millis}`` reference, committed together.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Tuple

from django.db import DatabaseError, transaction

from erp.exceptions import WorkflowError
from erp.models import Item, StockTransaction, Warehouse
from . import numbering, stock_service

logger = logging.getLogger(__name__)

TRANSFER_REFERENCE_ATTEMPTS = 5


def parse_quantity(value: Any) -> Optional[int]:
    """Return ``value`` as a positive whole number, or ``None``."""

    if isinstance(value, bool):
        return None
    try:
        qty = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    if not qty.is_finite() or qty != qty.to_integral_value() or qty <= 0:
        return None
    return int(qty)


def next_transfer_reference() -> str:
    """Return an unused transfer reference, stepping past taken milliseconds."""

    millis = numbering.epoch_millis()
    for offset in range(TRANSFER_REFERENCE_ATTEMPTS):
        candidate = numbering.format_transfer_reference(millis + offset)
        if not StockTransaction.objects.filter(reference_number=candidate).exists():
            return candidate
    raise WorkflowError("Could not allocate a unique transfer reference.")


def transfer_item(
    item_id: int,
    from_warehouse_id: int,
    to_warehouse_id: int,
    quantity: Any,
    user=None,
) -> Tuple[bool, str, Optional[str]]:
    """Move ``quantity`` of an item between warehouses. Returns the reference."""

    if not item_id or not from_warehouse_id or not to_warehouse_id or quantity in (None, ""):
        return False, "Fill in all fields", None
    if str(from_warehouse_id) == str(to_warehouse_id):
        return False, "Cannot transfer to same warehouse", None
    qty = parse_quantity(quantity)
    if qty is None:
        return False, "Quantity must be a positive whole number", None
    try:
        with transaction.atomic():
            reference = next_transfer_reference()
            item = Item.objects.get(pk=item_id)
            source = Warehouse.objects.get(pk=from_warehouse_id)
            destination = Warehouse.objects.get(pk=to_warehouse_id)
            stock_service.post_stock_transaction(
                item=item,
                warehouse=source,
                transaction_type=StockTransaction.STOCK_OUT,
                quantity=qty,
                reference_number=reference,
                notes=f"Transfer to warehouse {destination.name}",
                user=user,
            )
            stock_service.post_stock_transaction(
                item=item,
                warehouse=destination,
                transaction_type=StockTransaction.STOCK_IN,
                quantity=qty,
                reference_number=reference,
                notes=f"Transfer from warehouse {source.name}",
                user=user,
            )
    except (Item.DoesNotExist, Warehouse.DoesNotExist, ValueError) as exc:
        return False, f"Invalid reference: {exc}", None
    except WorkflowError as exc:
        logger.warning("Transfer of item %s refused: %s", item_id, exc)
        return False, str(exc), None
    except DatabaseError as exc:
        logger.error("Error transferring item %s: %s", item_id, exc)
        return False, "Database error recording transfer.", None
    logger.info(
        "Transferred %s x %s from %s to %s (%s)",
        qty,
        item.name,
        source.name,
        destination.name,
        reference,
    )
    return True, "Item transferred successfully", reference
