from decimal import Decimal

from rest_framework import serializers

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


class SupplierSerializer(serializers.ModelSerializer):
    """Serialize supplier contact details."""

    class Meta:
        model = Supplier
        fields = ["supplier_id", "name", "contact_info", "address", "contract", "created_at"]


class ItemSerializer(serializers.ModelSerializer):
    """Expose item catalogue details and list price."""

    class Meta:
        model = Item
        fields = [
            "item_id",
            "sku",
            "name",
            "description",
            "unit_of_measure",
            "unit_price",
            "min_threshold",
            "max_threshold",
            "is_active",
            "created_at",
            "updated_at",
        ]


class WarehouseSerializer(serializers.ModelSerializer):
    class Meta:
        model = Warehouse
        fields = [
            "warehouse_id",
            "name",
            "address",
            "description",
            "is_active",
            "created_at",
            "updated_at",
        ]


class InventoryLevelSerializer(serializers.ModelSerializer):
    """On-hand and available quantity per item and warehouse."""

    item_name = serializers.CharField(source="item.name", read_only=True)
    warehouse_name = serializers.CharField(source="warehouse.name", read_only=True)
    available_quantity = serializers.IntegerField(read_only=True)
    is_critical = serializers.BooleanField(read_only=True)
    is_low_stock = serializers.BooleanField(read_only=True)
    is_overstock = serializers.BooleanField(read_only=True)

    class Meta:
        model = InventoryLevel
        fields = [
            "inventory_id",
            "item",
            "item_name",
            "warehouse",
            "warehouse_name",
            "quantity",
            "reserved_quantity",
            "available_quantity",
            "is_critical",
            "is_low_stock",
            "is_overstock",
            "updated_at",
        ]


class RequisitionLineItemSerializer(serializers.ModelSerializer):
    item_name = serializers.CharField(source="item.name", read_only=True)

    class Meta:
        model = RequisitionLineItem
        fields = ["requisition_item_id", "item", "item_name", "quantity"]


class RequisitionSerializer(serializers.ModelSerializer):
    """Requisition header with nested line items.

    Lines are accepted on create only; the workflow itself is written by
    ``requisition_service.create_requisition`` from the API view.
    """

    items = RequisitionLineItemSerializer(many=True)
    supplier_name = serializers.CharField(source="supplier.name", read_only=True, default=None)

    class Meta:
        model = Requisition
        fields = [
            "requisition_id",
            "supplier",
            "supplier_name",
            "description",
            "status",
            "required_date",
            "created_at",
            "items",
        ]
        read_only_fields = ["status", "created_at"]

    def validate_items(self, value):
        if not value:
            raise serializers.ValidationError("Requisition must contain at least one item.")
        return value


class PurchaseOrderLineItemSerializer(serializers.ModelSerializer):
    item_name = serializers.CharField(source="item.name", read_only=True)

    class Meta:
        model = PurchaseOrderLineItem
        fields = ["po_item_id", "item", "item_name", "quantity", "price"]


class PurchaseOrderSerializer(serializers.ModelSerializer):
    """Purchase order header with nested line items."""

    items = PurchaseOrderLineItemSerializer(many=True)
    supplier_name = serializers.CharField(source="supplier.name", read_only=True, default=None)

    class Meta:
        model = PurchaseOrder
        fields = [
            "po_id",
            "po_number",
            "requisition",
            "supplier",
            "supplier_name",
            "order_date",
            "status",
            "notes",
            "warehouse",
            "approved_at",
            "created_at",
            "items",
        ]
        read_only_fields = [
            "po_number",
            "requisition",
            "status",
            "warehouse",
            "approved_at",
            "created_at",
        ]
        extra_kwargs = {"supplier": {"required": True, "allow_null": False}}

    def validate_items(self, value):
        if not value:
            raise serializers.ValidationError("Purchase Order must contain at least one item.")
        return value


class PurchaseOrderApprovalSerializer(serializers.Serializer):
    warehouse_id = serializers.IntegerField(
        required=True,
        error_messages={"required": "Select a destination warehouse before approving."},
    )


class GoodsReceiptSerializer(serializers.ModelSerializer):
    """Receiving record of a purchase order and its verification state."""

    po_number = serializers.CharField(source="purchase_order.po_number", read_only=True)
    is_verified = serializers.BooleanField(read_only=True)

    class Meta:
        model = GoodsReceipt
        fields = [
            "gr_id",
            "gr_number",
            "invoice_number",
            "purchase_order",
            "po_number",
            "status",
            "is_verified",
            "received_by",
            "verified_at",
            "created_at",
        ]


class GoodsReceiptVerifySerializer(serializers.Serializer):
    po_id = serializers.IntegerField()
    received_by = serializers.CharField(max_length=255)


class StockTransactionSerializer(serializers.ModelSerializer):
    """Ledger entry for an item in a warehouse."""

    item_name = serializers.CharField(source="item.name", read_only=True)
    warehouse_name = serializers.CharField(source="warehouse.name", read_only=True)

    class Meta:
        model = StockTransaction
        fields = [
            "transaction_id",
            "item",
            "item_name",
            "warehouse",
            "warehouse_name",
            "transaction_type",
            "quantity",
            "unit_cost",
            "total_cost",
            "reference_number",
            "notes",
            "created_by",
            "created_at",
        ]


class StockTransactionCreateSerializer(serializers.Serializer):
    """Manual stock-in or stock-out posted through the ledger."""

    item_id = serializers.IntegerField()
    warehouse_id = serializers.IntegerField()
    transaction_type = serializers.ChoiceField(choices=StockTransaction.TYPE_CHOICES)
    quantity = serializers.IntegerField(min_value=1)
    unit_cost = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=Decimal("0"), required=False, default=Decimal("0")
    )
    reference_number = serializers.CharField(
        max_length=100, required=False, allow_blank=True, default=""
    )
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class TransferSerializer(serializers.Serializer):
    item_id = serializers.IntegerField()
    from_warehouse_id = serializers.IntegerField()
    to_warehouse_id = serializers.IntegerField()
    quantity = serializers.CharField()


class LeadSerializer(serializers.ModelSerializer):
    product_name = serializers.CharField(source="product.name", read_only=True, default=None)

    class Meta:
        model = Lead
        fields = [
            "lead_id",
            "customer_name",
            "contact_info",
            "product",
            "product_name",
            "lead_status",
            "assigned_to",
            "demand_quantity",
            "available_stock",
            "unit_price",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["created_at", "updated_at"]

    def validate_lead_status(self, value):
        current = getattr(self.instance, "lead_status", None)
        if value == Lead.CONVERTED and current != Lead.CONVERTED:
            raise serializers.ValidationError("Leads are converted through the convert action.")
        return value


class QuotationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Quotation
        fields = [
            "quotation_id",
            "lead",
            "customer_name",
            "product",
            "assigned_to",
            "quantity",
            "unit_price",
            "total_amount",
            "status",
            "created_at",
            "updated_at",
        ]
