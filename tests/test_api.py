from datetime import date, datetime, timezone as dt_timezone
from decimal import Decimal

import pytest
from django.utils import timezone
from rest_framework.test import APIClient

from erp.models import GoodsReceipt, Lead, PurchaseOrder, Requisition, StockTransaction


@pytest.mark.django_db
def test_api_requires_authentication():
    resp = APIClient().get("/api/items/")
    assert resp.status_code in (401, 403)


@pytest.mark.django_db
def test_item_crud_and_name_filter(api_client):
    resp = api_client.post(
        "/api/items/",
        {"sku": "W-1", "name": "Widget", "unit_price": "2.50"},
        format="json",
    )
    assert resp.status_code == 201
    api_client.post("/api/items/", {"sku": "G-1", "name": "Gadget"}, format="json")

    resp = api_client.get("/api/items/", {"name": "widg"})
    assert [row["name"] for row in resp.json()] == ["Widget"]


@pytest.mark.django_db
def test_validation_errors_carry_status_code(api_client):
    resp = api_client.post("/api/items/", {"name": "No SKU"}, format="json")
    assert resp.status_code == 400
    body = resp.json()
    assert body["status_code"] == 400
    assert "sku" in body


@pytest.mark.django_db
def test_missing_record_is_404(api_client):
    resp = api_client.get("/api/purchase-orders/9999/")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Not found."


@pytest.mark.django_db
def test_requisition_create_and_approve(api_client, supplier_factory, item_factory):
    supplier = supplier_factory()
    items = [item_factory(), item_factory()]
    resp = api_client.post(
        "/api/requisitions/",
        {
            "supplier": supplier.pk,
            "description": "Weekly restock",
            "items": [
                {"item": items[0].pk, "quantity": 4},
                {"item": items[1].pk, "quantity": 1},
            ],
        },
        format="json",
    )
    assert resp.status_code == 201, resp.content
    req_id = resp.json()["requisition_id"]
    assert resp.json()["status"] == Requisition.PENDING
    assert len(resp.json()["items"]) == 2

    resp = api_client.post(f"/api/requisitions/{req_id}/approve/")
    assert resp.status_code == 201, resp.content
    po = resp.json()["purchase_order"]
    assert po["requisition"] == req_id
    assert [line["price"] for line in po["items"]] == ["0.00", "0.00"]
    assert GoodsReceipt.objects.get(purchase_order_id=po["po_id"]).status == GoodsReceipt.DELIVERED

    resp = api_client.post(f"/api/requisitions/{req_id}/approve/")
    assert resp.status_code == 409
    assert PurchaseOrder.objects.count() == 1

    resp = api_client.delete(f"/api/requisitions/{req_id}/")
    assert resp.status_code == 409


@pytest.mark.django_db
def test_requisition_without_lines_rejected(api_client):
    resp = api_client.post("/api/requisitions/", {"items": []}, format="json")
    assert resp.status_code == 400
    assert "items" in resp.json()


@pytest.mark.django_db
def test_purchase_order_create_and_approve(
    api_client, supplier_factory, item_factory, warehouse_factory
):
    warehouse = warehouse_factory()
    item = item_factory()
    resp = api_client.post(
        "/api/purchase-orders/",
        {
            "supplier": supplier_factory().pk,
            "order_date": date.today().isoformat(),
            "items": [{"item": item.pk, "quantity": 3, "price": "4.00"}],
        },
        format="json",
    )
    assert resp.status_code == 201, resp.content
    po_id = resp.json()["po_id"]

    resp = api_client.post(f"/api/purchase-orders/{po_id}/approve/", {}, format="json")
    assert resp.status_code == 400
    assert "warehouse_id" in resp.json()

    resp = api_client.post(
        f"/api/purchase-orders/{po_id}/approve/", {"warehouse_id": warehouse.pk}, format="json"
    )
    assert resp.status_code == 200, resp.content
    assert resp.json()["purchase_order"]["status"] == PurchaseOrder.APPROVED
    tx = StockTransaction.objects.get()
    assert tx.total_cost == Decimal("12.00")

    resp = api_client.post(
        f"/api/purchase-orders/{po_id}/approve/", {"warehouse_id": warehouse.pk}, format="json"
    )
    assert resp.status_code == 409
    assert StockTransaction.objects.count() == 1

    resp = api_client.get("/api/stock-transactions/", {"reference": tx.reference_number})
    assert len(resp.json()) == 1
    resp = api_client.get("/api/inventory-levels/", {"item": item.pk})
    assert resp.json()[0]["available_quantity"] == 3


@pytest.mark.django_db
def test_goods_receipt_verify(api_client, requisition_factory):
    requisition = requisition_factory()
    po_id = api_client.post(f"/api/requisitions/{requisition.pk}/approve/").json()[
        "purchase_order"
    ]["po_id"]

    resp = api_client.get("/api/goods-receipts/", {"verified": "0"})
    assert len(resp.json()) == 1

    resp = api_client.post(
        "/api/goods-receipts/verify/", {"po_id": po_id, "received_by": "Kim"}, format="json"
    )
    assert resp.status_code == 200, resp.content
    assert resp.json()["goods_receipt"]["is_verified"] is True
    assert api_client.get("/api/goods-receipts/", {"verified": "0"}).json() == []


@pytest.mark.django_db
def test_transfer_endpoint(api_client, item_factory, warehouse_factory, stock_level):
    item = item_factory()
    source = warehouse_factory()
    destination = warehouse_factory()
    stock_level(item, source, 5)
    payload = {
        "item_id": item.pk,
        "from_warehouse_id": source.pk,
        "to_warehouse_id": destination.pk,
        "quantity": "5",
    }

    resp = api_client.post("/api/stock-transactions/transfer/", payload, format="json")

    assert resp.status_code == 201, resp.content
    body = resp.json()
    assert body["reference_number"].startswith("TRANSFER-")
    assert [tx["transaction_type"] for tx in body["transactions"]] == [
        StockTransaction.STOCK_OUT,
        StockTransaction.STOCK_IN,
    ]

    resp = api_client.post("/api/stock-transactions/transfer/", payload, format="json")
    assert resp.status_code == 400
    assert "Insufficient stock" in resp.json()["detail"]

    resp = api_client.get("/api/inventory-levels/", {"critical": "1"})
    assert [row["warehouse"] for row in resp.json()] == [source.pk]


@pytest.mark.django_db
def test_lead_conversion_endpoint(api_client, item_factory, warehouse_factory, stock_level):
    product = item_factory(unit_price=Decimal("3.00"))
    stock_level(product, warehouse_factory(), 10)
    resp = api_client.post(
        "/api/leads/",
        {"customer_name": "Initech", "product": product.pk, "available_stock": 2},
        format="json",
    )
    assert resp.status_code == 201, resp.content
    lead_id = resp.json()["lead_id"]

    resp = api_client.post(f"/api/leads/{lead_id}/convert/")
    assert resp.status_code == 201, resp.content
    assert resp.json()["quotation"]["total_amount"] == "6.00"
    assert api_client.get("/api/leads/").json() == []
    assert len(api_client.get("/api/leads/", {"include_converted": "1"}).json()) == 1

    resp = api_client.post(f"/api/leads/{lead_id}/convert/")
    assert resp.status_code == 409


@pytest.mark.django_db
def test_lead_status_cannot_be_set_to_converted(api_client):
    lead = Lead.objects.create(customer_name="Umbrella")
    resp = api_client.patch(
        f"/api/leads/{lead.pk}/", {"lead_status": Lead.CONVERTED}, format="json"
    )
    assert resp.status_code == 400
    lead.refresh_from_db()
    assert lead.lead_status == Lead.NEW


@pytest.mark.django_db
def test_deleting_referenced_rows_is_a_conflict(
    api_client, supplier_factory, item_factory, warehouse_factory
):
    supplier = supplier_factory()
    item = item_factory()
    warehouse = warehouse_factory()
    po_id = api_client.post(
        "/api/purchase-orders/",
        {
            "supplier": supplier.pk,
            "order_date": date.today().isoformat(),
            "items": [{"item": item.pk, "quantity": 2, "price": "1.00"}],
        },
        format="json",
    ).json()["po_id"]
    api_client.post(
        f"/api/purchase-orders/{po_id}/approve/", {"warehouse_id": warehouse.pk}, format="json"
    )

    for url in (
        f"/api/items/{item.pk}/",
        f"/api/warehouses/{warehouse.pk}/",
        f"/api/suppliers/{supplier.pk}/",
    ):
        resp = api_client.delete(url)
        assert resp.status_code == 409, url
        assert resp.json()["detail"].startswith("Cannot delete: still referenced by")

    unused = supplier_factory()
    assert api_client.delete(f"/api/suppliers/{unused.pk}/").status_code == 204


@pytest.mark.django_db
def test_same_millisecond_transfers_return_only_their_rows(
    api_client, item_factory, warehouse_factory, stock_level, monkeypatch
):
    fixed = datetime(2025, 1, 1, tzinfo=dt_timezone.utc)
    monkeypatch.setattr(timezone, "now", lambda: fixed)
    item = item_factory()
    source = warehouse_factory()
    destination = warehouse_factory()
    stock_level(item, source, 10)
    payload = {
        "item_id": item.pk,
        "from_warehouse_id": source.pk,
        "to_warehouse_id": destination.pk,
        "quantity": "1",
    }

    first = api_client.post("/api/stock-transactions/transfer/", payload, format="json").json()
    second = api_client.post("/api/stock-transactions/transfer/", payload, format="json").json()

    assert first["reference_number"] != second["reference_number"]
    assert len(first["transactions"]) == 2
    assert len(second["transactions"]) == 2
    assert {tx["reference_number"] for tx in second["transactions"]} == {
        second["reference_number"]
    }


@pytest.mark.django_db
def test_manual_stock_transaction_endpoint(api_client, item_factory, warehouse_factory):
    item = item_factory()
    warehouse = warehouse_factory(name="Annex")

    resp = api_client.post(
        "/api/stock-transactions/",
        {
            "item_id": item.pk,
            "warehouse_id": warehouse.pk,
            "transaction_type": StockTransaction.STOCK_IN,
            "quantity": 4,
            "unit_cost": "2.50",
            "reference_number": "ADJ-1",
        },
        format="json",
    )

    assert resp.status_code == 201, resp.content
    body = resp.json()
    assert body["total_cost"] == "10.00"
    assert body["notes"] == "Annex"
    assert body["reference_number"] == "ADJ-1"

    resp = api_client.post(
        "/api/stock-transactions/",
        {
            "item_id": item.pk,
            "warehouse_id": warehouse.pk,
            "transaction_type": StockTransaction.STOCK_OUT,
            "quantity": 9,
        },
        format="json",
    )
    assert resp.status_code == 400
    assert "Insufficient stock" in resp.json()["detail"]

    resp = api_client.post(
        "/api/stock-transactions/",
        {"item_id": item.pk, "warehouse_id": warehouse.pk, "transaction_type": "gift", "quantity": 0},
        format="json",
    )
    assert resp.status_code == 400
    assert {"transaction_type", "quantity"} <= set(resp.json())
    assert StockTransaction.objects.count() == 1


@pytest.mark.django_db
def test_inventory_threshold_filters(api_client, item_factory, warehouse_factory, stock_level):
    warehouse = warehouse_factory()
    low = item_factory(name="Low", min_threshold=5)
    out = item_factory(name="Out", min_threshold=5)
    high = item_factory(name="High", max_threshold=50)
    stock_level(low, warehouse, 3)
    stock_level(out, warehouse, 0)
    stock_level(high, warehouse, 60)

    resp = api_client.get("/api/inventory-levels/", {"low_stock": "1"})
    assert [(row["item_name"], row["is_low_stock"]) for row in resp.json()] == [("Low", True)]

    resp = api_client.get("/api/inventory-levels/", {"overstock": "1"})
    assert [(row["item_name"], row["is_overstock"]) for row in resp.json()] == [("High", True)]
