from django.contrib import admin

from .models import (
    GoodsReceipt,
    InventoryLevel,
    Item,
    Lead,
    PurchaseOrder,
    PurchaseOrderLineItem,
    Quotation,
    Requisition,
    RequisitionLineItem,
    StockTransaction,
    Supplier,
    Warehouse,
)


class RequisitionLineItemInline(admin.TabularInline):
    model = RequisitionLineItem
    extra = 0


class PurchaseOrderLineItemInline(admin.TabularInline):
    model = PurchaseOrderLineItem
    extra = 0


@admin.register(Requisition)
class RequisitionAdmin(admin.ModelAdmin):
    list_display = ("requisition_id", "supplier", "status", "required_date", "created_at")
    list_filter = ("status",)
    inlines = [RequisitionLineItemInline]


@admin.register(PurchaseOrder)
class PurchaseOrderAdmin(admin.ModelAdmin):
    list_display = ("po_number", "supplier", "status", "order_date", "warehouse")
    list_filter = ("status",)
    search_fields = ("po_number",)
    inlines = [PurchaseOrderLineItemInline]


@admin.register(StockTransaction)
class StockTransactionAdmin(admin.ModelAdmin):
    list_display = (
        "transaction_id",
        "transaction_type",
        "item",
        "warehouse",
        "quantity",
        "total_cost",
        "reference_number",
        "created_at",
    )
    list_filter = ("transaction_type", "warehouse")
    search_fields = ("reference_number",)


for model in [
    Supplier,
    Item,
    Warehouse,
    InventoryLevel,
    GoodsReceipt,
    Lead,
    Quotation,
]:
    admin.site.register(model)
