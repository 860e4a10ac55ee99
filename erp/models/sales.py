from django.db import models

from .catalog import Item
from .fields import CoerceDecimalField


class Lead(models.Model):
    """A prospective sale of one product to a customer."""

    NEW = "new"
    QUALIFIED = "qualified"
    CONVERTED = "converted"
    STATUS_CHOICES = [
        (NEW, "New"),
        (QUALIFIED, "Qualified"),
        (CONVERTED, "Converted"),
    ]

    lead_id = models.AutoField(primary_key=True)
    customer_name = models.CharField(max_length=255)
    contact_info = models.CharField(max_length=255, blank=True, null=True)
    product = models.ForeignKey(
        Item, models.SET_NULL, db_column="product_id", blank=True, null=True
    )
    lead_status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=NEW)
    assigned_to = models.IntegerField(blank=True, null=True)
    demand_quantity = models.PositiveIntegerField(default=1)
    available_stock = models.IntegerField(blank=True, null=True)
    unit_price = CoerceDecimalField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:  # pragma: no cover - simple representation
        return f"Lead {self.pk} ({self.customer_name})"

    class Meta:
        db_table = "leads"
        ordering = ["-created_at", "-lead_id"]


class Quotation(models.Model):
    """A priced offer created from a converted lead."""

    quotation_id = models.AutoField(primary_key=True)
    lead = models.ForeignKey(
        Lead,
        models.SET_NULL,
        db_column="lead_id",
        blank=True,
        null=True,
        related_name="quotations",
    )
    customer_name = models.CharField(max_length=255)
    product = models.ForeignKey(
        Item, models.SET_NULL, db_column="product_id", blank=True, null=True
    )
    assigned_to = models.IntegerField(blank=True, null=True)
    quantity = models.PositiveIntegerField()
    unit_price = CoerceDecimalField()
    total_amount = CoerceDecimalField(max_digits=14)
    status = models.CharField(max_length=50, default="Pending", blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:  # pragma: no cover - simple representation
        return f"Quotation {self.pk} for {self.customer_name}"

    class Meta:
        db_table = "quotations"
        ordering = ["-created_at", "-quotation_id"]
