from django.db import models

from .fields import CoerceDecimalField


class Supplier(models.Model):
    """A vendor that purchase orders are placed with."""

    supplier_id = models.AutoField(primary_key=True)
    name = models.CharField(max_length=255, unique=True, null=False, blank=False)
    contact_info = models.CharField(max_length=255, blank=True, null=True)
    address = models.TextField(blank=True, null=True)
    contract = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:  # pragma: no cover - simple representation
        return self.name or f"Supplier {self.pk}"

    class Meta:
        db_table = "suppliers"
        ordering = ["name"]


class Item(models.Model):
    """A stocked product with its list price and stock thresholds."""

    item_id = models.AutoField(primary_key=True)
    sku = models.CharField(max_length=100, unique=True, null=False, blank=False)
    name = models.CharField(max_length=255, null=False, blank=False)
    description = models.TextField(blank=True, null=True)
    unit_of_measure = models.CharField(max_length=50, blank=True, null=True)
    unit_price = CoerceDecimalField()
    min_threshold = models.IntegerField(blank=True, null=True)
    max_threshold = models.IntegerField(blank=True, null=True)
    is_active = models.BooleanField(default=True, null=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:  # pragma: no cover - simple representation
        return self.name or f"Item {self.pk}"

    class Meta:
        db_table = "items"
        ordering = ["name"]


class Warehouse(models.Model):
    """A physical stock location."""

    warehouse_id = models.AutoField(primary_key=True)
    name = models.CharField(max_length=255, unique=True, null=False, blank=False)
    address = models.TextField(blank=True, null=True)
    description = models.TextField(blank=True, null=True)
    is_active = models.BooleanField(default=True, null=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:  # pragma: no cover - simple representation
        return self.name or f"Warehouse {self.pk}"

    class Meta:
        db_table = "warehouses"
        ordering = ["name"]
