import logging
from decimal import Decimal
from typing import Optional, Tuple

from django.db import DatabaseError, transaction
from django.db.models import QuerySet

from erp.exceptions import InsufficientStock, InvalidTransition, WorkflowError
from erp.models import Lead, Quotation
from . import stock_service

logger = logging.getLogger(__name__)


def open_leads() -> QuerySet:
    """Leads that have not been converted to a quotation."""
    return Lead.objects.exclude(lead_status=Lead.CONVERTED).select_related("product")


def convert_lead(lead_id: int) -> Tuple[bool, str, Optional[int]]:
    """Turn a lead into a pending quotation for its recorded available stock.

    The quotation covers the lead's ``available_stock`` snapshot, priced at
    the product's unit price. The lead is marked ``converted`` in the same
    transaction so it cannot be converted twice.
    """

    try:
        with transaction.atomic():
            lead = Lead.objects.select_for_update().get(pk=lead_id)
            if lead.lead_status == Lead.CONVERTED:
                raise InvalidTransition(
                    f"Lead {lead_id}", lead.lead_status, f"{Lead.NEW} or {Lead.QUALIFIED}"
                )
            product = lead.product
            if product is None:
                raise WorkflowError("Product not found.")
            requested = lead.available_stock or 0
            if requested <= 0:
                raise InsufficientStock(product.name, requested, 0)
            available = stock_service.get_available_quantity(product.item_id)
            if available < requested:
                raise InsufficientStock(product.name, requested, available)
            unit_price = Decimal(product.unit_price or 0)
            quotation = Quotation.objects.create(
                lead=lead,
                customer_name=lead.customer_name,
                product=product,
                assigned_to=lead.assigned_to,
                quantity=requested,
                unit_price=unit_price,
                total_amount=unit_price * requested,
                status="Pending",
            )
            lead.lead_status = Lead.CONVERTED
            lead.save(update_fields=["lead_status", "updated_at"])
    except (Lead.DoesNotExist, ValueError) as exc:
        return False, f"Invalid reference: {exc}", None
    except WorkflowError as exc:
        logger.warning("Lead %s conversion refused: %s", lead_id, exc)
        return False, str(exc), None
    except DatabaseError as exc:
        logger.error("Error converting lead %s: %s", lead_id, exc)
        return False, "Database error converting lead.", None
    logger.info("Lead %s converted to quotation %s", lead_id, quotation.quotation_id)
    return True, "Lead converted to quotation and status updated.", quotation.quotation_id
