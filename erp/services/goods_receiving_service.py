import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from django.db import DatabaseError, transaction
from django.utils import timezone

from erp.exceptions import InvalidTransition, WorkflowError
from erp.models import GoodsReceipt, PurchaseOrder
from . import numbering

logger = logging.getLogger(__name__)

# Receipts only move forward through these states.
_STATE_ORDER = {
    GoodsReceipt.PENDING: 0,
    GoodsReceipt.DELIVERED: 1,
    GoodsReceipt.VERIFIED: 2,
}


def record_receipt(
    po: PurchaseOrder,
    status: str,
    received_by: Optional[str] = None,
    now: Optional[datetime] = None,
) -> GoodsReceipt:
    """Create or advance the goods receipt of ``po``.

    This is the only place receipts are written. A PO has at most one
    receipt: the first call creates it in ``status``, later calls move it
    forward. Must run inside ``transaction.atomic()``.
    """

    if status not in _STATE_ORDER:
        raise WorkflowError(f"Unknown goods receipt status '{status}'.")
    now = now or timezone.now()
    receipt = GoodsReceipt.objects.select_for_update().filter(purchase_order=po).first()
    if receipt is None:
        receipt = GoodsReceipt.objects.create(
            purchase_order=po,
            gr_number=numbering.generate_gr_number(po.po_number, now),
            invoice_number=numbering.generate_invoice_number(now),
            status=status,
            received_by=received_by,
            verified_at=now if status == GoodsReceipt.VERIFIED else None,
        )
        logger.info("Goods receipt %s created as %s", receipt.gr_number, status)
        return receipt

    if _STATE_ORDER[status] <= _STATE_ORDER[receipt.status]:
        raise InvalidTransition(f"Goods receipt {receipt.gr_number}", receipt.status, _previous(status))
    receipt.status = status
    update_fields = ["status"]
    if received_by:
        receipt.received_by = received_by
        update_fields.append("received_by")
    if status == GoodsReceipt.VERIFIED:
        receipt.verified_at = now
        update_fields.append("verified_at")
    receipt.save(update_fields=update_fields)
    logger.info("Goods receipt %s moved to %s", receipt.gr_number, status)
    return receipt


def _previous(status: str) -> str:
    earlier = [s for s, rank in _STATE_ORDER.items() if rank < _STATE_ORDER[status]]
    return " or ".join(earlier)


def verify_receipt(po_id: int, received_by: str) -> Tuple[bool, str, Optional[int]]:
    """Mark the goods of a PO as received and checked by ``received_by``.

    Verification confirms the receiving record only; stock is posted to the
    ledger when the PO is approved into a warehouse.
    """

    received_by = (received_by or "").strip()
    if not received_by:
        return False, "Receiver name is required.", None
    try:
        with transaction.atomic():
            po = PurchaseOrder.objects.get(pk=po_id)
            lines = list(po.items.select_related("item"))
            receipt = record_receipt(po, GoodsReceipt.VERIFIED, received_by=received_by)
    except (PurchaseOrder.DoesNotExist, ValueError) as exc:
        return False, f"Invalid reference: {exc}", None
    except WorkflowError as exc:
        logger.warning("Goods receipt verification refused for PO %s: %s", po_id, exc)
        return False, str(exc), None
    except DatabaseError as exc:
        logger.error("Error verifying goods receipt for PO %s: %s", po_id, exc)
        return False, "Database error verifying goods receipt.", None
    for line in lines:
        logger.debug(
            "PO %s line verified: %s x %s", po.po_number, line.item.name, line.quantity
        )
    return (
        True,
        f"Goods receipt {receipt.gr_number} verified by {received_by} ({len(lines)} lines).",
        receipt.gr_id,
    )


def get_receipt_details(gr_id: int) -> Optional[Dict[str, Any]]:
    receipt = (
        GoodsReceipt.objects.select_related("purchase_order", "purchase_order__supplier")
        .filter(pk=gr_id)
        .first()
    )
    if receipt is None:
        return None
    po = receipt.purchase_order
    items: List[Dict[str, Any]] = [
        {
            "item_id": line.item_id,
            "item_name": line.item.name,
            "quantity": line.quantity,
            "price": line.price,
        }
        for line in po.items.select_related("item").order_by("po_item_id")
    ]
    return {
        "gr_id": receipt.gr_id,
        "gr_number": receipt.gr_number,
        "invoice_number": receipt.invoice_number,
        "po_id": po.po_id,
        "po_number": po.po_number,
        "supplier_name": po.supplier.name if po.supplier else None,
        "status": receipt.status,
        "is_verified": receipt.is_verified,
        "received_by": receipt.received_by,
        "created_at": receipt.created_at,
        "items": items,
    }
