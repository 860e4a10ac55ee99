import logging

from django.db.models import F
from rest_framework import mixins, permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from ..models import (
    GoodsReceipt,
    InventoryLevel,
    Item,
    Lead,
    PurchaseOrder,
    Quotation,
    Requisition,
    StockTransaction,
    Supplier,
    Warehouse,
)
from ..serializers import (
    GoodsReceiptSerializer,
    GoodsReceiptVerifySerializer,
    InventoryLevelSerializer,
    ItemSerializer,
    LeadSerializer,
    PurchaseOrderApprovalSerializer,
    PurchaseOrderSerializer,
    QuotationSerializer,
    RequisitionSerializer,
    StockTransactionCreateSerializer,
    StockTransactionSerializer,
    SupplierSerializer,
    TransferSerializer,
    WarehouseSerializer,
)
from ..services import (
    goods_receiving_service,
    lead_service,
    purchase_order_service,
    requisition_service,
    stock_service,
    transfer_service,
)

logger = logging.getLogger(__name__)


def _failure(message: str, code: int = status.HTTP_400_BAD_REQUEST) -> Response:
    return Response({"detail": message}, status=code)


def _conflict(label: str, current: str) -> Response:
    return _failure(f"{label} is already {current}.", status.HTTP_409_CONFLICT)


class SupplierViewSet(viewsets.ModelViewSet):
    """Standard CRUD API for suppliers."""

    queryset = Supplier.objects.all()
    serializer_class = SupplierSerializer
    permission_classes = [permissions.IsAuthenticated]


class ItemViewSet(viewsets.ModelViewSet):
    """API endpoint for CRUD operations on items.

    Query params:
        name: optional substring to filter item names.
    """

    queryset = Item.objects.all()
    serializer_class = ItemSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):
        queryset = super().get_queryset()
        name = self.request.query_params.get("name")
        if name:
            queryset = queryset.filter(name__icontains=name)
        return queryset


class WarehouseViewSet(viewsets.ModelViewSet):
    """Standard CRUD API for warehouses."""

    queryset = Warehouse.objects.all()
    serializer_class = WarehouseSerializer
    permission_classes = [permissions.IsAuthenticated]


class InventoryLevelViewSet(viewsets.ReadOnlyModelViewSet):
    """Stock on hand per item and warehouse.

    Query params:
        item, warehouse: restrict to one item or warehouse.
        critical: ``1`` to list only rows with no available stock.
        low_stock: ``1`` for rows in stock but at or below the item minimum.
        overstock: ``1`` for rows at or above the item maximum.
    """

    queryset = InventoryLevel.objects.all().select_related("item", "warehouse")
    serializer_class = InventoryLevelSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):
        queryset = super().get_queryset()
        params = self.request.query_params
        if params.get("item"):
            queryset = queryset.filter(item_id=params["item"])
        if params.get("warehouse"):
            queryset = queryset.filter(warehouse_id=params["warehouse"])
        if params.get("critical") == "1":
            queryset = queryset.annotate(
                available=F("quantity") - F("reserved_quantity")
            ).filter(available__lte=0)
        if params.get("low_stock") == "1":
            queryset = queryset.filter(stock_service.LOW_STOCK)
        if params.get("overstock") == "1":
            queryset = queryset.filter(stock_service.OVERSTOCK)
        return queryset


class RequisitionViewSet(
    mixins.CreateModelMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    """Purchase requisitions; lines are fixed once created.

    Query params:
        search: partial supplier name.
        status: exact status match.
    """

    queryset = Requisition.objects.all()
    serializer_class = RequisitionSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):
        params = self.request.query_params
        return requisition_service.list_requisitions(
            search=params.get("search", ""), status=params.get("status")
        )

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        supplier = data.get("supplier")
        success, msg, requisition_id = requisition_service.create_requisition(
            {
                "supplier_id": supplier.pk if supplier else None,
                "description": data.get("description"),
                "required_date": data.get("required_date"),
            },
            [
                {"item_id": line["item"].pk, "quantity": line["quantity"]}
                for line in data["items"]
            ],
        )
        if not success:
            return _failure(msg)
        requisition = self.get_queryset().get(pk=requisition_id)
        return Response(self.get_serializer(requisition).data, status=status.HTTP_201_CREATED)

    def destroy(self, request, *args, **kwargs):
        requisition = self.get_object()
        success, msg = requisition_service.delete_requisition(requisition.pk)
        if not success:
            return _conflict(f"Requisition {requisition.pk}", requisition.status)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=["post"])
    def approve(self, request, pk=None):
        requisition = self.get_object()
        if requisition.status != Requisition.PENDING:
            return _conflict(f"Requisition {requisition.pk}", requisition.status)
        success, msg, po_id = requisition_service.approve_requisition(requisition.pk)
        if not success:
            return _failure(msg)
        po = PurchaseOrder.objects.get(pk=po_id)
        return Response(
            {"detail": msg, "purchase_order": PurchaseOrderSerializer(po).data},
            status=status.HTTP_201_CREATED,
        )


class PurchaseOrderViewSet(
    mixins.CreateModelMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """Purchase orders with approval into a warehouse.

    Query params:
        status: exact status match.
        supplier: supplier ID.
    """

    queryset = PurchaseOrder.objects.all().select_related("supplier").prefetch_related(
        "items__item"
    )
    serializer_class = PurchaseOrderSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):
        queryset = super().get_queryset()
        params = self.request.query_params
        if params.get("status"):
            queryset = queryset.filter(status=params["status"])
        if params.get("supplier"):
            queryset = queryset.filter(supplier_id=params["supplier"])
        return queryset

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        success, msg, po_id = purchase_order_service.create_po(
            {
                "supplier_id": data["supplier"].pk,
                "order_date": data["order_date"],
                "notes": data.get("notes"),
            },
            [
                {"item_id": line["item"].pk, "quantity": line["quantity"], "price": line.get("price", 0)}
                for line in data["items"]
            ],
        )
        if not success:
            return _failure(msg)
        po = self.get_queryset().get(pk=po_id)
        return Response(self.get_serializer(po).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["post"])
    def approve(self, request, pk=None):
        po = self.get_object()
        if po.status != PurchaseOrder.PENDING:
            return _conflict(f"Purchase order {po.po_number}", po.status)
        payload = PurchaseOrderApprovalSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        success, msg, _ = purchase_order_service.approve_po(
            po.pk, payload.validated_data["warehouse_id"], user=request.user
        )
        if not success:
            return _failure(msg)
        po.refresh_from_db()
        return Response({"detail": msg, "purchase_order": self.get_serializer(po).data})


class GoodsReceiptViewSet(viewsets.ReadOnlyModelViewSet):
    """Goods receipts, one per purchase order.

    Query params:
        verified: ``1`` or ``0`` to filter on verification.
    """

    queryset = GoodsReceipt.objects.all().select_related("purchase_order")
    serializer_class = GoodsReceiptSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):
        queryset = super().get_queryset()
        verified = self.request.query_params.get("verified")
        if verified == "1":
            queryset = queryset.filter(status=GoodsReceipt.VERIFIED)
        elif verified == "0":
            queryset = queryset.exclude(status=GoodsReceipt.VERIFIED)
        return queryset

    @action(detail=False, methods=["post"])
    def verify(self, request):
        payload = GoodsReceiptVerifySerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        success, msg, gr_id = goods_receiving_service.verify_receipt(
            payload.validated_data["po_id"], payload.validated_data["received_by"]
        )
        if not success:
            return _failure(msg)
        receipt = self.get_queryset().get(pk=gr_id)
        return Response({"detail": msg, "goods_receipt": self.get_serializer(receipt).data})


class StockTransactionViewSet(mixins.CreateModelMixin, viewsets.ReadOnlyModelViewSet):
    """The append-only stock ledger. New entries are posted, never edited.

    Query params:
        item, warehouse: restrict to one item or warehouse.
        reference: exact reference number (PO number or transfer token).
    """

    queryset = StockTransaction.objects.all().select_related("item", "warehouse")
    serializer_class = StockTransactionSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):
        queryset = super().get_queryset()
        params = self.request.query_params
        if params.get("item"):
            queryset = queryset.filter(item_id=params["item"])
        if params.get("warehouse"):
            queryset = queryset.filter(warehouse_id=params["warehouse"])
        if params.get("reference"):
            queryset = queryset.filter(reference_number=params["reference"])
        return queryset

    def create(self, request, *args, **kwargs):
        payload = StockTransactionCreateSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        data = payload.validated_data
        success, msg, tx_id = stock_service.record_stock_transaction(
            data["item_id"],
            data["warehouse_id"],
            data["transaction_type"],
            data["quantity"],
            unit_cost=data["unit_cost"],
            reference_number=data["reference_number"] or None,
            notes=data["notes"] or None,
            user=request.user,
        )
        if not success:
            return _failure(msg)
        tx = self.get_queryset().get(pk=tx_id)
        return Response(self.get_serializer(tx).data, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=["post"])
    def transfer(self, request):
        payload = TransferSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        data = payload.validated_data
        success, msg, reference = transfer_service.transfer_item(
            data["item_id"],
            data["from_warehouse_id"],
            data["to_warehouse_id"],
            data["quantity"],
            user=request.user,
        )
        if not success:
            return _failure(msg)
        ledger = stock_service.get_ledger(reference)
        return Response(
            {
                "detail": msg,
                "reference_number": reference,
                "transactions": self.get_serializer(ledger, many=True).data,
            },
            status=status.HTTP_201_CREATED,
        )


class LeadViewSet(viewsets.ModelViewSet):
    """Sales leads. Converted leads are hidden unless ``include_converted=1``."""

    queryset = Lead.objects.all().select_related("product")
    serializer_class = LeadSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):
        if self.action == "list" and self.request.query_params.get("include_converted") != "1":
            return lead_service.open_leads()
        return super().get_queryset()

    @action(detail=True, methods=["post"])
    def convert(self, request, pk=None):
        lead = self.get_object()
        if lead.lead_status == Lead.CONVERTED:
            return _conflict(f"Lead {lead.pk}", lead.lead_status)
        success, msg, quotation_id = lead_service.convert_lead(lead.pk)
        if not success:
            return _failure(msg)
        quotation = Quotation.objects.get(pk=quotation_id)
        return Response(
            {"detail": msg, "quotation": QuotationSerializer(quotation).data},
            status=status.HTTP_201_CREATED,
        )


class QuotationViewSet(viewsets.ModelViewSet):
    """Standard CRUD API for quotations."""

    queryset = Quotation.objects.all().select_related("lead", "product")
    serializer_class = QuotationSerializer
    permission_classes = [permissions.IsAuthenticated]
