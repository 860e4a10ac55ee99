import logging
import time
from decimal import Decimal
from typing import List, Optional, Tuple

from django.conf import settings
from django.db import DatabaseError, OperationalError, transaction
from django.db.models import F, Q, Sum

from erp.exceptions import InsufficientStock, WorkflowError
from erp.models import InventoryLevel, Item, StockTransaction, Warehouse

logger = logging.getLogger(__name__)

TRANSACTION_TYPES = {StockTransaction.STOCK_IN, StockTransaction.STOCK_OUT}

# Threshold alerts on InventoryLevel rows; items without a threshold never match.
LOW_STOCK = Q(
    item__min_threshold__isnull=False,
    quantity__gt=0,
    quantity__lte=F("item__min_threshold"),
)
OVERSTOCK = Q(item__max_threshold__isnull=False, quantity__gte=F("item__max_threshold"))


def _actor(user):
    return user if getattr(user, "is_authenticated", False) else None


def post_stock_transaction(
    *,
    item: Item,
    warehouse: Warehouse,
    transaction_type: str,
    quantity: int,
    unit_cost: Decimal = Decimal("0"),
    reference_number: Optional[str] = None,
    notes: Optional[str] = None,
    user=None,
    allow_negative: Optional[bool] = None,
) -> StockTransaction:
    """Append one ledger entry and adjust the item's level in ``warehouse``.

    Must run inside ``transaction.atomic()``. Raises
    :class:`InsufficientStock` when a stock-out exceeds the available quantity
    and negative stock is not allowed.
    """

    if transaction_type not in TRANSACTION_TYPES:
        raise WorkflowError(f"Unknown transaction type '{transaction_type}'.")
    if quantity <= 0:
        raise WorkflowError("Stock transaction quantity must be positive.")
    if allow_negative is None:
        allow_negative = getattr(settings, "ERP_ALLOW_NEGATIVE_STOCK", False)

    level, _ = InventoryLevel.objects.select_for_update().get_or_create(
        item=item, warehouse=warehouse
    )
    if transaction_type == StockTransaction.STOCK_OUT:
        if not allow_negative and level.available_quantity < quantity:
            raise InsufficientStock(item.name, quantity, level.available_quantity)
        delta = -quantity
    else:
        delta = quantity
    InventoryLevel.objects.filter(pk=level.pk).update(quantity=F("quantity") + delta)

    unit_cost = Decimal(str(unit_cost or 0))
    return StockTransaction.objects.create(
        item=item,
        warehouse=warehouse,
        transaction_type=transaction_type,
        quantity=quantity,
        unit_cost=unit_cost,
        total_cost=unit_cost * quantity,
        reference_number=reference_number,
        notes=notes,
        created_by=_actor(user),
    )


def record_stock_transaction(
    item_id: int,
    warehouse_id: int,
    transaction_type: str,
    quantity: int,
    unit_cost: Decimal = Decimal("0"),
    reference_number: Optional[str] = None,
    notes: Optional[str] = None,
    user=None,
) -> Tuple[bool, str, Optional[int]]:
    """Record a single manual stock movement, retrying on lock contention."""

    try:
        quantity = int(quantity)
    except (TypeError, ValueError):
        return False, "Quantity must be a whole number.", None
    for attempt in range(5):
        try:
            with transaction.atomic():
                item = Item.objects.get(pk=item_id)
                warehouse = Warehouse.objects.get(pk=warehouse_id)
                tx = post_stock_transaction(
                    item=item,
                    warehouse=warehouse,
                    transaction_type=transaction_type,
                    quantity=quantity,
                    unit_cost=unit_cost,
                    reference_number=reference_number,
                    notes=notes or warehouse.name,
                    user=user,
                )
            return True, "Stock transaction recorded.", tx.transaction_id
        except (Item.DoesNotExist, Warehouse.DoesNotExist, ValueError) as exc:
            return False, f"Invalid reference: {exc}", None
        except WorkflowError as exc:
            logger.warning("Stock transaction refused: %s", exc)
            return False, str(exc), None
        except OperationalError as exc:  # pragma: no cover - retry on lock
            logger.error("Error recording stock transaction: %s", exc)
            time.sleep(0.1 * attempt)
            continue
        except DatabaseError as exc:  # pragma: no cover - unexpected backend failure
            logger.error("Error recording stock transaction: %s", exc)
            return False, "Database error recording stock transaction.", None
    return False, "Database error recording stock transaction.", None


def get_available_quantity(item_id: int, warehouse_id: Optional[int] = None) -> int:
    """Available quantity of an item in one warehouse or across all of them."""

    qs = InventoryLevel.objects.filter(item_id=item_id)
    if warehouse_id is not None:
        qs = qs.filter(warehouse_id=warehouse_id)
    totals = qs.aggregate(on_hand=Sum("quantity"), reserved=Sum("reserved_quantity"))
    return (totals["on_hand"] or 0) - (totals["reserved"] or 0)


def get_ledger(reference_number: str) -> List[StockTransaction]:
    return list(
        StockTransaction.objects.filter(reference_number=reference_number)
        .select_related("item", "warehouse")
        .order_by("transaction_id")
    )
