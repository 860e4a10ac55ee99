"""Lightweight count helpers for the dashboard."""

from django.db.models import F

from erp.models import GoodsReceipt, InventoryLevel, PurchaseOrder, Requisition
from erp.services.stock_service import LOW_STOCK, OVERSTOCK


def pending_requisition_count() -> int:
    """Return count of requisitions awaiting approval."""
    return Requisition.objects.filter(status=Requisition.PENDING).count()


def pending_po_count() -> int:
    """Return count of purchase orders not yet approved into a warehouse."""
    return PurchaseOrder.objects.filter(status=PurchaseOrder.PENDING).count()


def unverified_receipt_count() -> int:
    """Return count of goods receipts not yet verified."""
    return GoodsReceipt.objects.exclude(status=GoodsReceipt.VERIFIED).count()


def critical_stock_count() -> int:
    """Return count of item/warehouse rows with no available stock."""
    return (
        InventoryLevel.objects.annotate(available=F("quantity") - F("reserved_quantity"))
        .filter(available__lte=0)
        .count()
    )


def low_stock_count() -> int:
    """Return count of rows in stock but at or below the item's minimum."""
    return InventoryLevel.objects.filter(LOW_STOCK).count()


def overstock_count() -> int:
    """Return count of rows at or above the item's maximum."""
    return InventoryLevel.objects.filter(OVERSTOCK).count()
