from django.contrib.auth.decorators import login_required
from django.http import HttpResponse, JsonResponse

from erp.services import counts


def health_check(request):
    return HttpResponse("ok")


@login_required
def dashboard_counts(request):
    """Return the workload counters shown on the dashboard."""
    return JsonResponse(
        {
            "pending_requisitions": counts.pending_requisition_count(),
            "pending_purchase_orders": counts.pending_po_count(),
            "unverified_receipts": counts.unverified_receipt_count(),
            "critical_stock": counts.critical_stock_count(),
            "low_stock": counts.low_stock_count(),
            "overstock": counts.overstock_count(),
        }
    )
