from django.db import models

from .catalog import Item, Supplier, Warehouse
from .fields import CoerceDecimalField


class Requisition(models.Model):
    """An internal request to purchase items, subject to approval."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    STATUS_CHOICES = [
        (PENDING, "Pending"),
        (APPROVED, "Approved"),
        (REJECTED, "Rejected"),
    ]

    requisition_id = models.AutoField(primary_key=True)
    supplier = models.ForeignKey(
        Supplier, models.SET_NULL, db_column="supplier_id", blank=True, null=True
    )
    description = models.TextField(blank=True, null=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=PENDING)
    required_date = models.DateField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:  # pragma: no cover - simple representation
        return f"Requisition {self.pk}"

    class Meta:
        db_table = "purchase_requisitions"
        ordering = ["-created_at", "-requisition_id"]


class RequisitionLineItem(models.Model):
    """An item and quantity requested on a requisition."""

    requisition_item_id = models.AutoField(primary_key=True)
    requisition = models.ForeignKey(
        Requisition, models.CASCADE, db_column="requisition_id", related_name="items"
    )
    item = models.ForeignKey(Item, models.PROTECT, db_column="item_id")
    quantity = models.PositiveIntegerField()
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:  # pragma: no cover - simple representation
        return f"{self.requisition} - {self.item} x {self.quantity}"

    class Meta:
        db_table = "purchase_requisition_items"


class PurchaseOrder(models.Model):
    """A supplier-facing order, generated from a requisition or entered directly."""

    PENDING = "pending"
    APPROVED = "approved"
    STATUS_CHOICES = [
        (PENDING, "Pending"),
        (APPROVED, "Approved"),
    ]

    po_id = models.AutoField(primary_key=True)
    po_number = models.CharField(max_length=32, unique=True)
    requisition = models.ForeignKey(
        Requisition,
        models.SET_NULL,
        db_column="requisition_id",
        blank=True,
        null=True,
        related_name="purchase_orders",
    )
    supplier = models.ForeignKey(
        Supplier, models.PROTECT, db_column="supplier_id", blank=True, null=True
    )
    order_date = models.DateField()
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=PENDING)
    notes = models.TextField(blank=True, null=True)
    warehouse = models.ForeignKey(
        Warehouse, models.PROTECT, db_column="warehouse_id", blank=True, null=True
    )
    approved_at = models.DateTimeField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:  # pragma: no cover - simple representation
        return f"PO {self.po_number}"

    class Meta:
        db_table = "purchase_orders"
        ordering = ["-order_date", "-po_id"]


class PurchaseOrderLineItem(models.Model):
    """Quantity and agreed price of one item on a purchase order."""

    po_item_id = models.AutoField(primary_key=True)
    purchase_order = models.ForeignKey(
        PurchaseOrder,
        models.CASCADE,
        db_column="purchase_order_id",
        related_name="items",
    )
    item = models.ForeignKey(Item, models.PROTECT, db_column="item_id")
    quantity = models.PositiveIntegerField()
    price = CoerceDecimalField()
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:  # pragma: no cover - simple representation
        return f"{self.purchase_order} - {self.item}"

    class Meta:
        db_table = "purchase_order_items"


class GoodsReceipt(models.Model):
    """The single receiving record of a purchase order.

    ``pending -> delivered -> verified``; a receipt may also be created
    directly in any of those states.
    """

    PENDING = "pending"
    DELIVERED = "delivered"
    VERIFIED = "verified"
    STATUS_CHOICES = [
        (PENDING, "Pending"),
        (DELIVERED, "Delivered"),
        (VERIFIED, "Verified"),
    ]

    gr_id = models.AutoField(primary_key=True)
    gr_number = models.CharField(max_length=64, unique=True)
    invoice_number = models.CharField(max_length=64, blank=True, null=True)
    purchase_order = models.OneToOneField(
        PurchaseOrder,
        models.CASCADE,
        db_column="po_id",
        related_name="goods_receipt",
    )
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=PENDING)
    received_by = models.CharField(max_length=255, blank=True, null=True)
    verified_at = models.DateTimeField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    @property
    def is_verified(self) -> bool:
        return self.status == self.VERIFIED

    def __str__(self) -> str:  # pragma: no cover - simple representation
        return self.gr_number or f"GR {self.pk}"

    class Meta:
        db_table = "goods_receipts"
        ordering = ["-created_at", "-gr_id"]
