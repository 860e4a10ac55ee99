import csv
import io
from datetime import date

import pytest

from erp.models import InventoryLevel
from erp.services import goods_receiving_service, purchase_order_service, requisition_service


@pytest.mark.django_db
def test_health_check(client):
    resp = client.get("/healthz")
    assert resp.status_code == 200
    assert resp.content == b"ok"


@pytest.mark.django_db
def test_dashboard_counts(logged_in_client, requisition_factory, item_factory, warehouse_factory):
    requisition_factory()
    approved = requisition_factory()
    requisition_service.approve_requisition(approved.pk)
    InventoryLevel.objects.create(item=item_factory(), warehouse=warehouse_factory(), quantity=0)

    resp = logged_in_client.get("/dashboard/counts/")

    assert resp.status_code == 200
    assert resp.json() == {
        "pending_requisitions": 1,
        "pending_purchase_orders": 1,
        "unverified_receipts": 1,
        "critical_stock": 1,
        "low_stock": 0,
        "overstock": 0,
    }


@pytest.mark.django_db
def test_login_required_views_redirect_to_api_login(client):
    for url in ("/dashboard/counts/", "/api/goods-receipts/1/export/"):
        resp = client.get(url)
        assert resp.status_code == 302
        assert resp["Location"].startswith("/api-auth/login/?next=")
    assert client.get("/api-auth/login/").status_code == 200


@pytest.fixture
def verified_receipt(supplier_factory, item_factory):
    _, _, po_id = purchase_order_service.create_po(
        {"supplier_id": supplier_factory(name="Acme").pk, "order_date": date.today()},
        [{"item_id": item_factory(name="Widget").pk, "quantity": 2, "price": "5.00"}],
    )
    _, _, gr_id = goods_receiving_service.verify_receipt(po_id, "Kim")
    return goods_receiving_service.get_receipt_details(gr_id)


@pytest.mark.django_db
def test_goods_receipt_csv_export(logged_in_client, verified_receipt):
    resp = logged_in_client.get(
        f"/api/goods-receipts/{verified_receipt['gr_id']}/export/", {"format": "csv"}
    )
    assert resp.status_code == 200
    assert resp["Content-Type"] == "text/csv"
    assert resp["Content-Disposition"].endswith(f"{verified_receipt['gr_number']}.csv")
    rows = list(csv.reader(io.StringIO(resp.content.decode())))
    assert rows[0] == ["GR Number", verified_receipt["gr_number"]]
    assert ["Item", "Quantity", "Price"] in rows
    assert rows[-1] == ["Widget", "2", "5.00"]


@pytest.mark.django_db
def test_goods_receipt_pdf_export(logged_in_client, verified_receipt):
    resp = logged_in_client.get(f"/api/goods-receipts/{verified_receipt['gr_id']}/export/")
    assert resp.status_code == 200
    assert resp["Content-Type"] == "application/pdf"
    assert resp.content.startswith(b"%PDF")


@pytest.mark.django_db
def test_goods_receipt_export_missing(logged_in_client):
    assert logged_in_client.get("/api/goods-receipts/9999/export/").status_code == 404
