import decimal

import django.db.models.deletion
import erp.models.fields
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Supplier",
            fields=[
                ("supplier_id", models.AutoField(primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255, unique=True)),
                ("contact_info", models.CharField(blank=True, max_length=255, null=True)),
                ("address", models.TextField(blank=True, null=True)),
                ("contract", models.TextField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={"db_table": "suppliers", "ordering": ["name"]},
        ),
        migrations.CreateModel(
            name="Item",
            fields=[
                ("item_id", models.AutoField(primary_key=True, serialize=False)),
                ("sku", models.CharField(max_length=100, unique=True)),
                ("name", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True, null=True)),
                ("unit_of_measure", models.CharField(blank=True, max_length=50, null=True)),
                (
                    "unit_price",
                    erp.models.fields.CoerceDecimalField(
                        decimal_places=2, default=decimal.Decimal("0"), max_digits=12
                    ),
                ),
                ("min_threshold", models.IntegerField(blank=True, null=True)),
                ("max_threshold", models.IntegerField(blank=True, null=True)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={"db_table": "items", "ordering": ["name"]},
        ),
        migrations.CreateModel(
            name="Warehouse",
            fields=[
                ("warehouse_id", models.AutoField(primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255, unique=True)),
                ("address", models.TextField(blank=True, null=True)),
                ("description", models.TextField(blank=True, null=True)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={"db_table": "warehouses", "ordering": ["name"]},
        ),
        migrations.CreateModel(
            name="InventoryLevel",
            fields=[
                ("inventory_id", models.AutoField(primary_key=True, serialize=False)),
                ("quantity", models.IntegerField(default=0)),
                ("reserved_quantity", models.IntegerField(default=0)),
                ("last_counted_at", models.DateTimeField(blank=True, null=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "item",
                    models.ForeignKey(
                        db_column="item_id",
                        on_delete=django.db.models.deletion.CASCADE,
                        to="erp.item",
                    ),
                ),
                (
                    "warehouse",
                    models.ForeignKey(
                        db_column="warehouse_id",
                        on_delete=django.db.models.deletion.CASCADE,
                        to="erp.warehouse",
                    ),
                ),
            ],
            options={
                "db_table": "inventory",
                "constraints": [
                    models.UniqueConstraint(
                        fields=("item", "warehouse"), name="inventory_item_warehouse_unique"
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="StockTransaction",
            fields=[
                ("transaction_id", models.AutoField(primary_key=True, serialize=False)),
                (
                    "transaction_type",
                    models.CharField(
                        choices=[("stock-in", "Stock In"), ("stock-out", "Stock Out")],
                        max_length=20,
                    ),
                ),
                ("quantity", models.PositiveIntegerField()),
                (
                    "unit_cost",
                    erp.models.fields.CoerceDecimalField(
                        decimal_places=2, default=decimal.Decimal("0"), max_digits=12
                    ),
                ),
                (
                    "total_cost",
                    erp.models.fields.CoerceDecimalField(
                        decimal_places=2, default=decimal.Decimal("0"), max_digits=14
                    ),
                ),
                (
                    "reference_number",
                    models.CharField(blank=True, db_index=True, max_length=100, null=True),
                ),
                ("notes", models.TextField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "created_by",
                    models.ForeignKey(
                        blank=True,
                        db_column="created_by",
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "item",
                    models.ForeignKey(
                        db_column="item_id",
                        on_delete=django.db.models.deletion.PROTECT,
                        to="erp.item",
                    ),
                ),
                (
                    "warehouse",
                    models.ForeignKey(
                        db_column="warehouse_id",
                        on_delete=django.db.models.deletion.PROTECT,
                        to="erp.warehouse",
                    ),
                ),
            ],
            options={
                "db_table": "stock_transactions",
                "ordering": ["-created_at", "-transaction_id"],
            },
        ),
        migrations.CreateModel(
            name="Requisition",
            fields=[
                ("requisition_id", models.AutoField(primary_key=True, serialize=False)),
                ("description", models.TextField(blank=True, null=True)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("approved", "Approved"),
                            ("rejected", "Rejected"),
                        ],
                        default="pending",
                        max_length=20,
                    ),
                ),
                ("required_date", models.DateField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "supplier",
                    models.ForeignKey(
                        blank=True,
                        db_column="supplier_id",
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        to="erp.supplier",
                    ),
                ),
            ],
            options={
                "db_table": "purchase_requisitions",
                "ordering": ["-created_at", "-requisition_id"],
            },
        ),
        migrations.CreateModel(
            name="RequisitionLineItem",
            fields=[
                ("requisition_item_id", models.AutoField(primary_key=True, serialize=False)),
                ("quantity", models.PositiveIntegerField()),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "item",
                    models.ForeignKey(
                        db_column="item_id",
                        on_delete=django.db.models.deletion.PROTECT,
                        to="erp.item",
                    ),
                ),
                (
                    "requisition",
                    models.ForeignKey(
                        db_column="requisition_id",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="erp.requisition",
                    ),
                ),
            ],
            options={"db_table": "purchase_requisition_items"},
        ),
        migrations.CreateModel(
            name="PurchaseOrder",
            fields=[
                ("po_id", models.AutoField(primary_key=True, serialize=False)),
                ("po_number", models.CharField(max_length=32, unique=True)),
                ("order_date", models.DateField()),
                (
                    "status",
                    models.CharField(
                        choices=[("pending", "Pending"), ("approved", "Approved")],
                        default="pending",
                        max_length=20,
                    ),
                ),
                ("notes", models.TextField(blank=True, null=True)),
                ("approved_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "requisition",
                    models.ForeignKey(
                        blank=True,
                        db_column="requisition_id",
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="purchase_orders",
                        to="erp.requisition",
                    ),
                ),
                (
                    "supplier",
                    models.ForeignKey(
                        blank=True,
                        db_column="supplier_id",
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        to="erp.supplier",
                    ),
                ),
                (
                    "warehouse",
                    models.ForeignKey(
                        blank=True,
                        db_column="warehouse_id",
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        to="erp.warehouse",
                    ),
                ),
            ],
            options={"db_table": "purchase_orders", "ordering": ["-order_date", "-po_id"]},
        ),
        migrations.CreateModel(
            name="PurchaseOrderLineItem",
            fields=[
                ("po_item_id", models.AutoField(primary_key=True, serialize=False)),
                ("quantity", models.PositiveIntegerField()),
                (
                    "price",
                    erp.models.fields.CoerceDecimalField(
                        decimal_places=2, default=decimal.Decimal("0"), max_digits=12
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "item",
                    models.ForeignKey(
                        db_column="item_id",
                        on_delete=django.db.models.deletion.PROTECT,
                        to="erp.item",
                    ),
                ),
                (
                    "purchase_order",
                    models.ForeignKey(
                        db_column="purchase_order_id",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="erp.purchaseorder",
                    ),
                ),
            ],
            options={"db_table": "purchase_order_items"},
        ),
        migrations.CreateModel(
            name="GoodsReceipt",
            fields=[
                ("gr_id", models.AutoField(primary_key=True, serialize=False)),
                ("gr_number", models.CharField(max_length=64, unique=True)),
                ("invoice_number", models.CharField(blank=True, max_length=64, null=True)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("delivered", "Delivered"),
                            ("verified", "Verified"),
                        ],
                        default="pending",
                        max_length=20,
                    ),
                ),
                ("received_by", models.CharField(blank=True, max_length=255, null=True)),
                ("verified_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "purchase_order",
                    models.OneToOneField(
                        db_column="po_id",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="goods_receipt",
                        to="erp.purchaseorder",
                    ),
                ),
            ],
            options={"db_table": "goods_receipts", "ordering": ["-created_at", "-gr_id"]},
        ),
        migrations.CreateModel(
            name="Lead",
            fields=[
                ("lead_id", models.AutoField(primary_key=True, serialize=False)),
                ("customer_name", models.CharField(max_length=255)),
                ("contact_info", models.CharField(blank=True, max_length=255, null=True)),
                (
                    "lead_status",
                    models.CharField(
                        choices=[
                            ("new", "New"),
                            ("qualified", "Qualified"),
                            ("converted", "Converted"),
                        ],
                        default="new",
                        max_length=20,
                    ),
                ),
                ("assigned_to", models.IntegerField(blank=True, null=True)),
                ("demand_quantity", models.PositiveIntegerField(default=1)),
                ("available_stock", models.IntegerField(blank=True, null=True)),
                (
                    "unit_price",
                    erp.models.fields.CoerceDecimalField(
                        blank=True,
                        decimal_places=2,
                        default=decimal.Decimal("0"),
                        max_digits=12,
                        null=True,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "product",
                    models.ForeignKey(
                        blank=True,
                        db_column="product_id",
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        to="erp.item",
                    ),
                ),
            ],
            options={"db_table": "leads", "ordering": ["-created_at", "-lead_id"]},
        ),
        migrations.CreateModel(
            name="Quotation",
            fields=[
                ("quotation_id", models.AutoField(primary_key=True, serialize=False)),
                ("customer_name", models.CharField(max_length=255)),
                ("assigned_to", models.IntegerField(blank=True, null=True)),
                ("quantity", models.PositiveIntegerField()),
                (
                    "unit_price",
                    erp.models.fields.CoerceDecimalField(
                        decimal_places=2, default=decimal.Decimal("0"), max_digits=12
                    ),
                ),
                (
                    "total_amount",
                    erp.models.fields.CoerceDecimalField(
                        decimal_places=2, default=decimal.Decimal("0"), max_digits=14
                    ),
                ),
                (
                    "status",
                    models.CharField(blank=True, default="Pending", max_length=50, null=True),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "lead",
                    models.ForeignKey(
                        blank=True,
                        db_column="lead_id",
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="quotations",
                        to="erp.lead",
                    ),
                ),
                (
                    "product",
                    models.ForeignKey(
                        blank=True,
                        db_column="product_id",
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        to="erp.item",
                    ),
                ),
            ],
            options={"db_table": "quotations", "ordering": ["-created_at", "-quotation_id"]},
        ),
    ]
