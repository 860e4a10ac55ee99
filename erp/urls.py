"""API routes for the ERP app."""

from django.urls import path
from rest_framework.routers import DefaultRouter

from .views import (
    GoodsReceiptViewSet,
    InventoryLevelViewSet,
    ItemViewSet,
    LeadViewSet,
    PurchaseOrderViewSet,
    QuotationViewSet,
    RequisitionViewSet,
    StockTransactionViewSet,
    SupplierViewSet,
    WarehouseViewSet,
    goods_receipt_export,
)

router = DefaultRouter()
router.register(r"suppliers", SupplierViewSet)
router.register(r"items", ItemViewSet)
router.register(r"warehouses", WarehouseViewSet)
router.register(r"inventory-levels", InventoryLevelViewSet)
router.register(r"requisitions", RequisitionViewSet)
router.register(r"purchase-orders", PurchaseOrderViewSet)
router.register(r"goods-receipts", GoodsReceiptViewSet)
router.register(r"stock-transactions", StockTransactionViewSet)
router.register(r"leads", LeadViewSet)
router.register(r"quotations", QuotationViewSet)

urlpatterns = [
    path(
        "goods-receipts/<int:pk>/export/",
        goods_receipt_export,
        name="goods_receipt_export",
    ),
] + router.urls
