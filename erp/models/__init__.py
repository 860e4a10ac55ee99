from .catalog import Item, Supplier, Warehouse
from .fields import CoerceDecimalField
from .procurement import (
    GoodsReceipt,
    PurchaseOrder,
    PurchaseOrderLineItem,
    Requisition,
    RequisitionLineItem,
)
from .sales import Lead, Quotation
from .stock import InventoryLevel, StockTransaction

__all__ = [
    "CoerceDecimalField",
    "Supplier",
    "Item",
    "Warehouse",
    "InventoryLevel",
    "StockTransaction",
    "Requisition",
    "RequisitionLineItem",
    "PurchaseOrder",
    "PurchaseOrderLineItem",
    "GoodsReceipt",
    "Lead",
    "Quotation",
]
