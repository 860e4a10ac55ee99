import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from django.db import DatabaseError, transaction
from django.db.models import QuerySet

from erp.exceptions import InvalidTransition, WorkflowError
from erp.models import GoodsReceipt, Item, Requisition, RequisitionLineItem, Supplier
from . import goods_receiving_service, purchase_order_service

logger = logging.getLogger(__name__)


def create_requisition(
    req_data: Dict[str, Any], items_data: List[Dict[str, Any]]
) -> Tuple[bool, str, Optional[int]]:
    """Create a pending requisition with its line items."""

    if not items_data:
        return False, "Requisition must contain at least one item.", None
    lines = []
    for idx, item_d in enumerate(items_data, start=1):
        if not item_d.get("item_id"):
            return False, f"Line {idx}: item is required.", None
        try:
            qty = int(item_d.get("quantity"))
        except (TypeError, ValueError):
            return False, f"Line {idx}: quantity must be a whole number.", None
        if qty <= 0:
            return False, f"Line {idx}: quantity must be greater than zero.", None
        lines.append((item_d["item_id"], qty))
    try:
        with transaction.atomic():
            supplier = None
            if req_data.get("supplier_id"):
                supplier = Supplier.objects.get(pk=req_data["supplier_id"])
            requisition = Requisition.objects.create(
                supplier=supplier,
                description=(req_data.get("description") or "").strip() or None,
                required_date=req_data.get("required_date"),
                status=Requisition.PENDING,
            )
            RequisitionLineItem.objects.bulk_create(
                [
                    RequisitionLineItem(
                        requisition=requisition,
                        item=Item.objects.get(pk=item_id),
                        quantity=qty,
                    )
                    for item_id, qty in lines
                ]
            )
    except (Supplier.DoesNotExist, Item.DoesNotExist, ValueError) as exc:
        return False, f"Invalid reference: {exc}", None
    except DatabaseError as exc:
        logger.error("Error creating requisition: %s", exc)
        return False, "Database error creating requisition.", None
    return True, "Requisition created", requisition.requisition_id


def list_requisitions(search: str = "", status: Optional[str] = None) -> QuerySet:
    """Requisitions with supplier and lines, filtered by supplier name and status."""

    qs = Requisition.objects.select_related("supplier").prefetch_related("items__item")
    search = (search or "").strip()
    if search:
        qs = qs.filter(supplier__name__icontains=search)
    if status:
        qs = qs.filter(status=status)
    return qs



def delete_requisition(requisition_id: int) -> Tuple[bool, str]:
    """Delete a requisition that has not produced a purchase order."""

    requisition = Requisition.objects.filter(pk=requisition_id).first()
    if requisition is None:
        return False, f"Requisition {requisition_id} not found."
    if requisition.status == Requisition.APPROVED:
        return False, "Approved requisitions cannot be deleted."
    requisition.delete()
    return True, "Requisition deleted"


def approve_requisition(requisition_id: int) -> Tuple[bool, str, Optional[int]]:
    """Approve a pending requisition and turn it into a purchase order.

    In one transaction: the requisition moves to ``approved``, a pending PO
    is created with every requisition line copied at price 0, and the PO's
    goods receipt is recorded as ``delivered``. Returns the new PO id.
    """

    try:
        with transaction.atomic():
            updated = Requisition.objects.filter(
                pk=requisition_id, status=Requisition.PENDING
            ).update(status=Requisition.APPROVED)
            requisition = Requisition.objects.select_related("supplier").get(pk=requisition_id)
            if not updated:
                raise InvalidTransition(
                    f"Requisition {requisition_id}", requisition.status, Requisition.PENDING
                )
            lines = list(
                requisition.items.select_related("item").order_by("requisition_item_id")
            )
            po = purchase_order_service.create_po_record(
                supplier=requisition.supplier,
                requisition=requisition,
                lines=[(line.item, line.quantity, Decimal("0")) for line in lines],
            )
            receipt = goods_receiving_service.record_receipt(po, GoodsReceipt.DELIVERED)
    except (Requisition.DoesNotExist, ValueError) as exc:
        return False, f"Invalid reference: {exc}", None
    except WorkflowError as exc:
        logger.warning("Requisition %s approval refused: %s", requisition_id, exc)
        return False, str(exc), None
    except DatabaseError as exc:
        logger.error("Error approving requisition %s: %s", requisition_id, exc)
        return False, "Database error approving requisition.", None
    logger.info(
        "Requisition %s approved: PO %s with %d lines, receipt %s",
        requisition_id,
        po.po_number,
        len(lines),
        receipt.gr_number,
    )
    return True, f"Requisition approved; PO {po.po_number} created.", po.po_id
