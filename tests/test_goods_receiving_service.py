from datetime import date, datetime, timezone
from decimal import Decimal

import pytest
from django.db import transaction

from erp.exceptions import InvalidTransition
from erp.models import GoodsReceipt, PurchaseOrder, StockTransaction
from erp.services import goods_receiving_service, purchase_order_service, requisition_service


def _po(supplier, item, quantity=10):
    success, msg, po_id = purchase_order_service.create_po(
        {"supplier_id": supplier.pk, "order_date": date.today()},
        [{"item_id": item.item_id, "quantity": quantity, "price": 1.0}],
    )
    assert success, msg
    return PurchaseOrder.objects.get(pk=po_id)


@pytest.mark.django_db
def test_record_receipt_creates_numbers(supplier_factory, item_factory):
    po = _po(supplier_factory(), item_factory())
    now = datetime(2025, 3, 4, 12, tzinfo=timezone.utc)
    with transaction.atomic():
        receipt = goods_receiving_service.record_receipt(po, GoodsReceipt.PENDING, now=now)
    assert receipt.gr_number == f"GR-20250304-{po.po_number}"
    assert receipt.invoice_number == "INV-20250304"
    assert receipt.status == GoodsReceipt.PENDING
    assert receipt.verified_at is None


@pytest.mark.django_db
def test_record_receipt_only_moves_forward(supplier_factory, item_factory):
    po = _po(supplier_factory(), item_factory())
    with transaction.atomic():
        goods_receiving_service.record_receipt(po, GoodsReceipt.DELIVERED)
    with pytest.raises(InvalidTransition):
        with transaction.atomic():
            goods_receiving_service.record_receipt(po, GoodsReceipt.PENDING)
    with transaction.atomic():
        receipt = goods_receiving_service.record_receipt(
            po, GoodsReceipt.VERIFIED, received_by="Dana"
        )
    assert receipt.status == GoodsReceipt.VERIFIED
    assert receipt.received_by == "Dana"
    assert receipt.verified_at is not None
    assert GoodsReceipt.objects.filter(purchase_order=po).count() == 1


@pytest.mark.django_db
def test_verify_receipt_advances_delivered_receipt(requisition_factory):
    requisition = requisition_factory()
    _, _, po_id = requisition_service.approve_requisition(requisition.pk)

    success, msg, gr_id = goods_receiving_service.verify_receipt(po_id, "  Sam  ")

    assert success, msg
    receipt = GoodsReceipt.objects.get(pk=gr_id)
    assert receipt.purchase_order_id == po_id
    assert receipt.is_verified
    assert receipt.received_by == "Sam"
    assert msg == f"Goods receipt {receipt.gr_number} verified by Sam (1 lines)."
    assert StockTransaction.objects.count() == 0


@pytest.mark.django_db
def test_verify_receipt_creates_missing_receipt(supplier_factory, item_factory):
    po = _po(supplier_factory(), item_factory())
    success, msg, gr_id = goods_receiving_service.verify_receipt(po.pk, "Lee")
    assert success, msg
    assert GoodsReceipt.objects.get(pk=gr_id).status == GoodsReceipt.VERIFIED


@pytest.mark.django_db
def test_verify_twice_is_refused(supplier_factory, item_factory):
    po = _po(supplier_factory(), item_factory())
    assert goods_receiving_service.verify_receipt(po.pk, "Lee")[0]
    success, msg, _ = goods_receiving_service.verify_receipt(po.pk, "Lee")
    assert not success
    assert "verified" in msg


@pytest.mark.django_db
def test_verify_requires_receiver(supplier_factory, item_factory):
    po = _po(supplier_factory(), item_factory())
    success, msg, _ = goods_receiving_service.verify_receipt(po.pk, "   ")
    assert not success
    assert msg == "Receiver name is required."
    assert not GoodsReceipt.objects.exists()


@pytest.mark.django_db
def test_get_receipt_details(supplier_factory, item_factory):
    supplier = supplier_factory(name="Acme")
    item = item_factory(name="Widget")
    po = _po(supplier, item, quantity=3)
    _, _, gr_id = goods_receiving_service.verify_receipt(po.pk, "Lee")

    details = goods_receiving_service.get_receipt_details(gr_id)

    assert details["po_number"] == po.po_number
    assert details["supplier_name"] == "Acme"
    assert details["is_verified"]
    assert details["items"] == [
        {"item_id": item.pk, "item_name": "Widget", "quantity": 3, "price": Decimal("1")}
    ]
    assert goods_receiving_service.get_receipt_details(9999) is None
