"""Service layer for the ERP app."""

from . import (
    counts,
    goods_receiving_service,
    lead_service,
    numbering,
    purchase_order_service,
    requisition_service,
    stock_service,
    transfer_service,
)

__all__ = [
    "counts",
    "numbering",
    "stock_service",
    "requisition_service",
    "purchase_order_service",
    "goods_receiving_service",
    "transfer_service",
    "lead_service",
]
