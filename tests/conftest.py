import os
import sys
from decimal import Decimal

import django
import pytest

# Ensure project root is on sys.path
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "erp_site.settings")
django.setup()

from erp.models import InventoryLevel, Item, Requisition, RequisitionLineItem, Supplier, Warehouse  # noqa: E402


@pytest.fixture
def item_factory(db):
    counter = {"n": 0}

    def create_item(**kwargs):
        counter["n"] += 1
        defaults = {
            "sku": f"SKU-{counter['n']:04d}",
            "name": f"Item {counter['n']}",
            "unit_of_measure": "pcs",
            "unit_price": Decimal("0"),
            "is_active": True,
        }
        defaults.update(kwargs)
        return Item.objects.create(**defaults)

    return create_item


@pytest.fixture
def supplier_factory(db):
    counter = {"n": 0}

    def create_supplier(**kwargs):
        counter["n"] += 1
        defaults = {"name": f"Vendor {counter['n']}"}
        defaults.update(kwargs)
        return Supplier.objects.create(**defaults)

    return create_supplier


@pytest.fixture
def warehouse_factory(db):
    counter = {"n": 0}

    def create_warehouse(**kwargs):
        counter["n"] += 1
        defaults = {"name": f"Warehouse {counter['n']}", "is_active": True}
        defaults.update(kwargs)
        return Warehouse.objects.create(**defaults)

    return create_warehouse


@pytest.fixture
def stock_level(db):
    """Set the on-hand quantity of an item in a warehouse."""

    def set_level(item, warehouse, quantity, reserved=0):
        level, _ = InventoryLevel.objects.update_or_create(
            item=item,
            warehouse=warehouse,
            defaults={"quantity": quantity, "reserved_quantity": reserved},
        )
        return level

    return set_level


@pytest.fixture
def requisition_factory(db, supplier_factory, item_factory):
    def create_requisition(lines=None, supplier=None, **kwargs):
        if supplier is None:
            supplier = supplier_factory()
        requisition = Requisition.objects.create(supplier=supplier, **kwargs)
        if lines is None:
            lines = [(item_factory(), 5)]
        for item, quantity in lines:
            RequisitionLineItem.objects.create(
                requisition=requisition, item=item, quantity=quantity
            )
        return requisition

    return create_requisition


@pytest.fixture
def user(db):
    from django.contrib.auth import get_user_model

    User = get_user_model()
    user, _ = User.objects.get_or_create(username="admin")
    user.set_password("admin")
    user.save()
    return user


@pytest.fixture
def api_client(user):
    """REST framework client authenticated as the default admin user."""

    from rest_framework.test import APIClient

    client = APIClient()
    client.force_authenticate(user=user)
    yield client
    client.force_authenticate(user=None)


@pytest.fixture
def logged_in_client(client, user):
    client.force_login(user)
    yield client
    client.logout()
