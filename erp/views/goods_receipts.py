import csv
import logging

from django.contrib.auth.decorators import login_required
from django.http import Http404, HttpResponse
from fpdf import FPDF
from fpdf.enums import XPos, YPos

from ..services import goods_receiving_service

logger = logging.getLogger(__name__)


@login_required
def goods_receipt_export(request, pk: int):
    """Download a goods receipt with its PO lines as PDF (default) or CSV."""

    details = goods_receiving_service.get_receipt_details(pk)
    if details is None:
        raise Http404("Goods receipt not found")
    filename = f"goods_receipt_{details['gr_number']}"
    fmt = (request.GET.get("format") or "pdf").lower()
    if fmt == "csv":
        response = HttpResponse(content_type="text/csv")
        response["Content-Disposition"] = f"attachment; filename={filename}.csv"
        writer = csv.writer(response)
        writer.writerow(["GR Number", details["gr_number"]])
        writer.writerow(["PO Number", details["po_number"]])
        writer.writerow(["Invoice", details["invoice_number"] or ""])
        writer.writerow(["Status", details["status"]])
        writer.writerow([])
        writer.writerow(["Item", "Quantity", "Price"])
        for line in details["items"]:
            writer.writerow([line["item_name"], line["quantity"], line["price"]])
        return response

    pdf = FPDF()
    pdf.add_page()
    pdf.set_font("Helvetica", size=12)
    for label, value in (
        ("Goods Receipt", details["gr_number"]),
        ("PO", details["po_number"]),
        ("Supplier", details["supplier_name"] or "-"),
        ("Invoice", details["invoice_number"] or "-"),
        ("Status", details["status"]),
        ("Received by", details["received_by"] or "-"),
    ):
        pdf.cell(0, 10, f"{label}: {value}", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.ln(4)
    pdf.set_font("Helvetica", size=10)
    pdf.cell(100, 8, "Item", border=1)
    pdf.cell(30, 8, "Quantity", border=1)
    pdf.cell(30, 8, "Price", border=1, new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    for line in details["items"]:
        pdf.cell(100, 8, str(line["item_name"]), border=1)
        pdf.cell(30, 8, str(line["quantity"]), border=1)
        pdf.cell(
            30,
            8,
            str(line["price"]),
            border=1,
            new_x=XPos.LMARGIN,
            new_y=YPos.NEXT,
        )
    pdf_bytes = bytes(pdf.output())
    logger.debug("Exported goods receipt %s as PDF", details["gr_number"])
    response = HttpResponse(pdf_bytes, content_type="application/pdf")
    response["Content-Disposition"] = f"attachment; filename={filename}.pdf"
    return response
