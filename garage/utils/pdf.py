import io
import os
import logging
from datetime import datetime
from typing import Optional, Any, List

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_LEFT, TA_RIGHT
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.utils import ImageReader
from reportlab.platypus import (
    SimpleDocTemplate,
    Paragraph,
    Spacer,
    Table,
    TableStyle,
    HRFlowable,
    Image as RLImage,
)
from xml.sax.saxutils import escape

from garage.config import settings
from garage.utils.pricing import format_currency, format_amount, to_decimal

logger = logging.getLogger(__name__)

MARGIN = 50          # points, all four sides
LOGO_BOX = (220, 60)
DIVIDER = colors.HexColor("#e5e7eb")

# Replace "smart" characters so missing glyphs don't render as boxes
_REPLACEMENTS = str.maketrans({
    "\u2010": "-", "\u2011": "-", "\u2012": "-", "\u2013": "-", "\u2014": "-", "\u2015": "-",
    "\u2212": "-", "\u2022": "*", "\u00A0": " ", "\u2018": "'", "\u2019": "'",
    "\u201C": '"', "\u201D": '"',
})


def _clean(s: Any) -> str:
    if s is None:
        return ""
    return escape(str(s).translate(_REPLACEMENTS))


def _dash(s: Any) -> str:
    s2 = _clean(s)
    return s2 if s2.strip() else "-"


def _styles() -> dict:
    base = getSampleStyleSheet()
    return {
        "title":    ParagraphStyle("GarageTitle", parent=base["Title"], fontSize=18, alignment=TA_CENTER),
        "title_l":  ParagraphStyle("GarageTitleLeft", parent=base["Title"], fontSize=18, alignment=TA_LEFT),
        "h3":       ParagraphStyle("GarageH3", parent=base["Heading3"], alignment=TA_LEFT),
        "body":     ParagraphStyle("GarageBody", parent=base["Normal"], fontSize=11, leading=15),
        "cell":     ParagraphStyle("GarageCell", parent=base["Normal"], fontSize=10, leading=12),
        "right":    ParagraphStyle("GarageRight", parent=base["Normal"], fontSize=12, leading=16,
                                   alignment=TA_RIGHT),
    }


def _new_document(buf: io.BytesIO, title: str) -> SimpleDocTemplate:
    return SimpleDocTemplate(
        buf,
        pagesize=A4,
        topMargin=MARGIN,
        bottomMargin=MARGIN,
        leftMargin=MARGIN,
        rightMargin=MARGIN,
        title=title,
        author=settings.APP_NAME,
    )


def _logo(path: str) -> Optional[RLImage]:
    """Logo scaled to fit LOGO_BOX, or None when the file is missing or unreadable."""
    if not os.path.exists(path):
        return None
    try:
        w, h = ImageReader(path).getSize()
    except OSError as e:
        logger.warning(f"PDF logo failed to load: {e}")
        return None
    scale = min(LOGO_BOX[0] / w, LOGO_BOX[1] / h, 1.0)
    return RLImage(path, width=w * scale, height=h * scale)


def _header(title: str, styles: dict) -> List[Any]:
    """Logo on the left with the title beside it, or a centered title, then a divider."""
    story: List[Any] = []
    logo = _logo(settings.logo_path)
    if logo is not None:
        tbl = Table([[logo, Paragraph(_clean(title), styles["title_l"])]],
                    colWidths=[LOGO_BOX[0] + 20, None])
        tbl.setStyle(TableStyle([
            ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
            ("LEFTPADDING", (0, 0), (-1, -1), 0),
        ]))
        story.append(tbl)
    else:
        story.append(Paragraph(_clean(title), styles["title"]))
    story.append(HRFlowable(width="100%", thickness=1, color=DIVIDER, spaceBefore=6, spaceAfter=10))
    return story


def _table_style(numeric_from_col: int) -> TableStyle:
    return TableStyle([
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTNAME", (0, 1), (-1, -1), "Helvetica"),
        ("FONTSIZE", (0, 0), (-1, -1), 10),
        ("LINEBELOW", (0, 0), (-1, 0), 0.75, colors.black),
        ("LINEBELOW", (0, 1), (-1, -1), 0.25, colors.lightgrey),
        ("ALIGN", (numeric_from_col, 0), (-1, -1), "RIGHT"),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ("TOPPADDING", (0, 0), (-1, -1), 4),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
    ])


def render_invoice_pdf(
    invoice_id: int,
    vehicle: dict,
    days_in_garage: int,
    garage_stay_rate,
    items: list[dict],
    garage_stay,
    subtotal,
    tax,
    total,
) -> bytes:
    """Build the invoice document and return the PDF bytes."""
    buf = io.BytesIO()
    title = f"Invoice #{invoice_id}"
    doc = _new_document(buf, title)
    styles = _styles()
    cur = settings.CURRENCY

    story: List[Any] = _header(title, styles)

    # Meta
    meta = [f"Vehicle Plate: {_dash(vehicle.get('plate'))}", f"Customer: {_dash(vehicle.get('owner'))}"]
    if vehicle.get("contact_number"):
        meta.append(f"Contact: {_clean(vehicle['contact_number'])}")
    if vehicle.get("model_name"):
        meta.append(f"Model: {_clean(vehicle['model_name'])}")
    make_year = " * ".join(str(x) for x in (vehicle.get("make"), vehicle.get("year")) if x)
    if make_year:
        meta.append(f"Make/Year: {_clean(make_year)}")
    if vehicle.get("vin"):
        meta.append(f"VIN: {_clean(vehicle['vin'])}")
    meta.append(f"Days in Garage: {days_in_garage or 0}")
    meta.append(f"Garage Stay Rate: {format_currency(garage_stay_rate)}")
    for line in meta:
        story.append(Paragraph(line, styles["body"]))
    story.append(Spacer(1, 12))

    # Items
    story.append(Paragraph("<u>Items</u>", styles["h3"]))
    rows: List[List[Any]] = [["Type", "Description", "Qty", f"Unit ({cur})", f"Total ({cur})"]]
    for it in items:
        rows.append([
            _dash(it.get("item_type")),
            Paragraph(_dash(it.get("description")), styles["cell"]),
            str(it.get("quantity") if it.get("quantity") is not None else ""),
            format_currency(it.get("unit_price")),
            format_currency(it.get("total")),
        ])
    tbl = Table(rows, colWidths=[55, 205, 40, 95, 100], repeatRows=1)
    tbl.setStyle(_table_style(numeric_from_col=2))
    story.append(tbl)
    story.append(Spacer(1, 16))

    # Totals
    rate_pct = (to_decimal(settings.TAX_RATE) * 100).normalize()
    totals = Table([
        ["Garage Stay:", format_currency(garage_stay)],
        ["Subtotal:",    format_currency(subtotal)],
        [f"Tax ({rate_pct:f}%):", format_currency(tax)],
        ["Total:",       format_currency(total)],
    ], colWidths=[100, 120], hAlign="RIGHT")
    totals.setStyle(TableStyle([
        ("ALIGN", (0, 0), (-1, -1), "RIGHT"),
        ("FONTNAME", (0, 0), (-1, -2), "Helvetica"),
        ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 12),
        ("LINEABOVE", (0, -1), (-1, -1), 0.75, colors.black),
    ]))
    story.append(totals)

    doc.build(story)
    logger.info(f"Invoice #{invoice_id} PDF rendered ({buf.tell()} bytes)")
    return buf.getvalue()


def render_payment_report_pdf(worker: dict, payments: list[dict], total_paid) -> bytes:
    """Build a worker's payment history report and return the PDF bytes."""
    buf = io.BytesIO()
    doc = _new_document(buf, f"{worker.get('name') or 'Worker'} - Payments")
    styles = _styles()

    story: List[Any] = [Paragraph("Worker Payment Report", styles["title"]), Spacer(1, 6)]
    story.append(Paragraph(f"Worker: {_clean(worker.get('name'))} (ID: {worker.get('id')})", styles["body"]))
    if worker.get("job_title"):
        story.append(Paragraph(f"Job Title: {_clean(worker['job_title'])}", styles["body"]))
    if worker.get("phone"):
        story.append(Paragraph(f"Phone: {_clean(worker['phone'])}", styles["body"]))
    if worker.get("email"):
        story.append(Paragraph(f"Email: {_clean(worker['email'])}", styles["body"]))
    story.append(Paragraph(f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M')}", styles["body"]))
    story.append(Spacer(1, 14))

    story.append(Paragraph("<u>Payments</u>", styles["h3"]))
    rows: List[List[Any]] = [["Date/Time", "Amount", "Method", "Notes"]]
    for p in payments:
        paid_at = p.get("payment_date")
        rows.append([
            paid_at.strftime("%Y-%m-%d %H:%M") if paid_at else "",
            format_amount(p.get("amount")),
            Paragraph(_dash(p.get("method")), styles["cell"]),
            Paragraph(_dash(p.get("notes")), styles["cell"]),
        ])
    tbl = Table(rows, colWidths=[120, 90, 90, 195], repeatRows=1)
    tbl.setStyle(TableStyle(_table_style(numeric_from_col=1).getCommands() + [
        ("ALIGN", (2, 0), (-1, -1), "LEFT"),
    ]))
    story.append(tbl)
    story.append(Spacer(1, 18))
    story.append(Paragraph(f"Total Paid: {format_amount(total_paid)}", styles["right"]))

    doc.build(story)
    logger.info(f"Payment report for worker #{worker.get('id')} rendered ({buf.tell()} bytes)")
    return buf.getvalue()
