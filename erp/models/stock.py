from django.conf import settings
from django.db import models

from .catalog import Item, Warehouse
from .fields import CoerceDecimalField


class InventoryLevel(models.Model):
    """On-hand quantity of one item in one warehouse.

    Every stock ledger posting adjusts the matching row inside the same
    transaction, so ``quantity`` always equals the sum of stock-in minus
    stock-out postings for the pair.
    """

    inventory_id = models.AutoField(primary_key=True)
    item = models.ForeignKey(Item, models.CASCADE, db_column="item_id")
    warehouse = models.ForeignKey(Warehouse, models.CASCADE, db_column="warehouse_id")
    quantity = models.IntegerField(default=0)
    reserved_quantity = models.IntegerField(default=0)
    last_counted_at = models.DateTimeField(blank=True, null=True)
    updated_at = models.DateTimeField(auto_now=True)

    @property
    def available_quantity(self) -> int:
        return (self.quantity or 0) - (self.reserved_quantity or 0)

    @property
    def is_critical(self) -> bool:
        return self.available_quantity <= 0

    @property
    def is_low_stock(self) -> bool:
        threshold = self.item.min_threshold
        return threshold is not None and 0 < self.quantity <= threshold

    @property
    def is_overstock(self) -> bool:
        threshold = self.item.max_threshold
        return threshold is not None and self.quantity >= threshold

    def __str__(self) -> str:  # pragma: no cover - simple representation
        return f"{self.item} @ {self.warehouse}: {self.quantity}"

    class Meta:
        db_table = "inventory"
        constraints = [
            models.UniqueConstraint(
                fields=["item", "warehouse"], name="inventory_item_warehouse_unique"
            )
        ]


class StockTransaction(models.Model):
    """Append-only ledger entry moving stock into or out of a warehouse."""

    STOCK_IN = "stock-in"
    STOCK_OUT = "stock-out"
    TYPE_CHOICES = [
        (STOCK_IN, "Stock In"),
        (STOCK_OUT, "Stock Out"),
    ]

    transaction_id = models.AutoField(primary_key=True)
    item = models.ForeignKey(Item, models.PROTECT, db_column="item_id")
    warehouse = models.ForeignKey(Warehouse, models.PROTECT, db_column="warehouse_id")
    transaction_type = models.CharField(max_length=20, choices=TYPE_CHOICES)
    quantity = models.PositiveIntegerField()
    unit_cost = CoerceDecimalField()
    total_cost = CoerceDecimalField(max_digits=14)
    reference_number = models.CharField(max_length=100, blank=True, null=True, db_index=True)
    notes = models.TextField(blank=True, null=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        models.SET_NULL,
        db_column="created_by",
        blank=True,
        null=True,
    )
    created_at = models.DateTimeField(auto_now_add=True)

    @property
    def signed_quantity(self) -> int:
        return self.quantity if self.transaction_type == self.STOCK_IN else -self.quantity

    def __str__(self) -> str:  # pragma: no cover - simple representation
        return f"{self.transaction_type} {self.quantity} x {self.item} ({self.reference_number})"

    class Meta:
        db_table = "stock_transactions"
        ordering = ["-created_at", "-transaction_id"]
