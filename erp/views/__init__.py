from .api import (
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
)
from .goods_receipts import goods_receipt_export

__all__ = [
    "SupplierViewSet",
    "ItemViewSet",
    "WarehouseViewSet",
    "InventoryLevelViewSet",
    "RequisitionViewSet",
    "PurchaseOrderViewSet",
    "GoodsReceiptViewSet",
    "StockTransactionViewSet",
    "LeadViewSet",
    "QuotationViewSet",
    "goods_receipt_export",
]
