import logging
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, List, Optional, Tuple

from django.db import DatabaseError, IntegrityError, transaction
from django.utils import timezone

from erp.exceptions import InvalidTransition, WorkflowError
from erp.models import (
    Item,
    PurchaseOrder,
    PurchaseOrderLineItem,
    Requisition,
    StockTransaction,
    Supplier,
    Warehouse,
)
from . import numbering, stock_service

logger = logging.getLogger(__name__)

PO_NUMBER_ATTEMPTS = 5


def next_po_number() -> str:
    """Return a PO number not yet used by any purchase order."""

    for _ in range(PO_NUMBER_ATTEMPTS):
        candidate = numbering.generate_po_number()
        if not PurchaseOrder.objects.filter(po_number=candidate).exists():
            return candidate
    raise WorkflowError("Could not allocate a unique PO number.")


def create_po_record(
    *,
    supplier: Optional[Supplier],
    lines: Iterable[Tuple[Item, int, Decimal]],
    requisition: Optional[Requisition] = None,
    order_date: Optional[date] = None,
    notes: Optional[str] = None,
) -> PurchaseOrder:
    """Insert a pending PO and its lines. Must run inside ``transaction.atomic()``."""

    po = PurchaseOrder.objects.create(
        po_number=next_po_number(),
        requisition=requisition,
        supplier=supplier,
        order_date=order_date or timezone.localdate(),
        status=PurchaseOrder.PENDING,
        notes=notes,
    )
    PurchaseOrderLineItem.objects.bulk_create(
        [
            PurchaseOrderLineItem(purchase_order=po, item=item, quantity=qty, price=price)
            for item, qty, price in lines
        ]
    )
    return po


def _clean_lines(items_data: List[Dict[str, Any]]) -> Tuple[Optional[str], List[Dict[str, Any]]]:
    cleaned = []
    for idx, item_d in enumerate(items_data, start=1):
        if not item_d.get("item_id"):
            return f"Line {idx}: item is required.", []
        try:
            qty = int(item_d.get("quantity"))
            price = Decimal(str(item_d.get("price", 0) or 0))
        except (TypeError, ValueError, InvalidOperation):
            return f"Line {idx}: quantity and price must be numeric.", []
        if qty <= 0:
            return f"Line {idx}: quantity must be greater than zero.", []
        if price < 0:
            return f"Line {idx}: price cannot be negative.", []
        cleaned.append({"item_id": item_d["item_id"], "quantity": qty, "price": price})
    return None, cleaned


def create_po(
    po_data: Dict[str, Any], items_data: List[Dict[str, Any]]
) -> Tuple[bool, str, Optional[int]]:
    """Create a purchase order directly, without a requisition."""

    required = ["supplier_id", "order_date"]
    missing = [f for f in required if not po_data.get(f)]
    if missing:
        return False, f"Missing required fields: {', '.join(missing)}", None
    if not items_data:
        return False, "Purchase Order must contain at least one item.", None
    error, lines = _clean_lines(items_data)
    if error:
        return False, error, None
    try:
        with transaction.atomic():
            supplier = Supplier.objects.get(pk=po_data["supplier_id"])
            po = create_po_record(
                supplier=supplier,
                lines=[
                    (Item.objects.get(pk=line["item_id"]), line["quantity"], line["price"])
                    for line in lines
                ],
                order_date=po_data["order_date"],
                notes=po_data.get("notes"),
            )
    except (Supplier.DoesNotExist, Item.DoesNotExist, ValueError) as exc:
        return False, f"Invalid reference: {exc}", None
    except WorkflowError as exc:
        logger.error("Error creating PO: %s", exc)
        return False, str(exc), None
    except IntegrityError as exc:
        logger.error("Integrity error creating PO: %s", exc)
        return False, "Database error creating Purchase Order.", None
    except DatabaseError as exc:  # pragma: no cover - unexpected backend failure
        logger.error("Error creating PO: %s", exc)
        return False, "Database error creating Purchase Order.", None
    logger.info("Purchase order %s created with %d lines", po.po_number, len(lines))
    return True, f"Purchase Order {po.po_number} created", po.po_id


def line_unit_cost(line: PurchaseOrderLineItem) -> Decimal:
    """Cost used for stock posting: PO price, else item list price, else zero."""

    if line.price:
        return Decimal(line.price)
    if line.item.unit_price:
        return Decimal(line.item.unit_price)
    return Decimal("0")


def approve_po(
    po_id: int, warehouse_id: Optional[int], user=None
) -> Tuple[bool, str, Optional[int]]:
    """Approve a pending PO and post its lines into ``warehouse_id``.

    The status change and every stock-in posting commit together. Only a
    pending PO can be approved, so a repeated approval posts nothing.
    """

    if not warehouse_id:
        return False, "Select a destination warehouse before approving.", None
    try:
        with transaction.atomic():
            warehouse = Warehouse.objects.get(pk=warehouse_id, is_active=True)
            now = timezone.now()
            updated = PurchaseOrder.objects.filter(
                pk=po_id, status=PurchaseOrder.PENDING
            ).update(
                status=PurchaseOrder.APPROVED,
                warehouse=warehouse,
                approved_at=now,
                updated_at=now,
            )
            po = PurchaseOrder.objects.get(pk=po_id)
            if not updated:
                raise InvalidTransition(
                    f"Purchase order {po.po_number}", po.status, PurchaseOrder.PENDING
                )
            lines = list(po.items.select_related("item").order_by("po_item_id"))
            for line in lines:
                stock_service.post_stock_transaction(
                    item=line.item,
                    warehouse=warehouse,
                    transaction_type=StockTransaction.STOCK_IN,
                    quantity=line.quantity,
                    unit_cost=line_unit_cost(line),
                    reference_number=po.po_number,
                    notes=f"Receipt from PO {po.po_number}",
                    user=user,
                )
    except (PurchaseOrder.DoesNotExist, Warehouse.DoesNotExist, ValueError) as exc:
        return False, f"Invalid reference: {exc}", None
    except WorkflowError as exc:
        logger.warning("PO %s approval refused: %s", po_id, exc)
        return False, str(exc), None
    except DatabaseError as exc:
        logger.error("Error approving PO %s: %s", po_id, exc)
        return False, "Database error approving Purchase Order.", None
    logger.info(
        "PO %s approved into warehouse %s: %d stock-in transactions",
        po.po_number,
        warehouse.name,
        len(lines),
    )
    return (
        True,
        f"PO {po.po_number} approved; {len(lines)} stock transactions recorded.",
        po.po_id,
    )
