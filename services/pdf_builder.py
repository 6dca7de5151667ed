"""
Invoice PDF builder.

Lays out one Takealot invoice on a single A4 page (mm units, top-left origin,
text drawn on its baseline) in a fixed top-to-bottom pass:

    header band -> title -> billing block -> items table -> totals -> footer

Every section takes the current cursor and returns the next one. There is no
pagination and no validation: whatever the invoice carries is drawn as-is.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Iterable, NamedTuple, Sequence

from fpdf import FPDF

from helpers import ensure_dir, latin1_text, sanitize_filename_segment
from schemas.invoice import InvoiceData, InvoiceItem
from schemas.settings import SenderProfile

log = logging.getLogger("pdf")

FONT = "Helvetica"
MARGIN = 20
CURRENCY = "R"

DEFAULT_TZ = timezone(timedelta(hours=2))  # SAST
DEFAULT_DATE_FORMAT = "%d/%m/%Y"

COLORS = {
    "primary": (0, 0, 0),
    "secondary": (128, 128, 128),
    "rule": (230, 230, 240),
    "text_dark": (0, 0, 0),
    "text_gray": (89, 89, 89),
    "text_light": (255, 255, 255),
    "bg_light": (250, 250, 250),
    "bg_zebra": (245, 245, 245),
}

HEADER_HEIGHT = 40
HEADER_STRIP_HEIGHT = 6
BLOCK_LINE_HEIGHT_FACTOR = 1.5

BILLING_WRAP_WIDTH = 90
BILLING_LINE = 5
BILLING_RIGHT_COLUMN_OFFSET = 80

TABLE_HEADER_HEIGHT = 10
DESCRIPTION_WRAP_WIDTH = 100
ROW_LINE = 4
ROW_PADDING = 4
MIN_ROW_HEIGHT = 12

# right edges of the numeric columns, measured from the right page edge
QTY_RIGHT = 72
UNIT_PRICE_RIGHT = 45
TOTAL_RIGHT = 25

TOTALS_LEFT = 100


class Position(NamedTuple):
    x: float
    y: float


@dataclass(frozen=True)
class RenderedDocument:
    content: bytes
    filename: str

    media_type = "application/pdf"


# ---------------------------
# Pure helpers
# ---------------------------

def format_currency(value: float) -> str:
    return f"{CURRENCY}{float(value):.2f}"


def invoice_subtotal(items: Iterable[InvoiceItem]) -> float:
    """Sum of the supplied line totals; quantity x unit price is never recomputed."""
    return sum(float(item.total) for item in items)


def format_invoice_date(epoch_text: str, tz: timezone = DEFAULT_TZ, fmt: str = DEFAULT_DATE_FORMAT) -> str:
    """
    "1700000000" -> "15/11/2023" (SAST). Unparseable input is returned verbatim.
    """
    try:
        return datetime.fromtimestamp(int(epoch_text), tz=tz).strftime(fmt)
    except (TypeError, ValueError, OverflowError, OSError):
        return epoch_text or ""


def document_filename(invoice: InvoiceData) -> str:
    return f"invoice-{invoice.order_number}-{sanitize_filename_segment(invoice.customer_name)}.pdf"


def row_height(line_count: int) -> float:
    """Items table row advance; multi-line descriptions grow the row."""
    return max(line_count * ROW_LINE + ROW_PADDING, MIN_ROW_HEIGHT)


# ---------------------------
# Drawing primitives
# ---------------------------

def _text(pdf: FPDF, x: float, y: float, text, align: str = "L") -> None:
    s = latin1_text(text)
    if not s:
        return
    if align == "R":
        x -= pdf.get_string_width(s)
    pdf.text(x, y, s)


def _text_block(pdf: FPDF, lines: Sequence[str], x: float, y: float, align: str = "L") -> None:
    step = pdf.font_size * BLOCK_LINE_HEIGHT_FACTOR
    for i, line in enumerate(lines):
        _text(pdf, x, y + i * step, line, align=align)


def wrap_text(pdf: FPDF, text, width: float) -> list[str]:
    """Split text into lines that fit `width` at the current font. Empty text is one empty line."""
    s = latin1_text(text)
    if not s:
        return [""]
    lines = pdf.multi_cell(width, ROW_LINE, s, dry_run=True, output="LINES")
    return lines or [""]


def _fill(pdf: FPDF, color: str) -> None:
    pdf.set_fill_color(*COLORS[color])


def _ink(pdf: FPDF, color: str, size: float, style: str = "") -> None:
    pdf.set_text_color(*COLORS[color])
    pdf.set_font(FONT, style, size)


# ---------------------------
# Sections
# ---------------------------

def draw_header(pdf: FPDF, margin: float, profile: SenderProfile) -> Position:
    page_w = pdf.w

    _fill(pdf, "primary")
    pdf.rect(0, 0, page_w, HEADER_HEIGHT, style="F")
    _fill(pdf, "secondary")
    pdf.rect(0, 0, page_w, HEADER_STRIP_HEIGHT, style="F")

    _ink(pdf, "text_light", 22)
    _text(pdf, margin, 20, profile.company_name)
    _ink(pdf, "text_light", 11)
    _text(pdf, margin, 30, profile.trading_name)

    _ink(pdf, "text_gray", 9)
    details = [f"REG NO: {profile.registration_number}", *profile.address.splitlines()]
    _text_block(pdf, details, page_w - margin, 20, align="R")

    return Position(margin, 60)


def draw_title(pdf: FPDF, pos: Position) -> Position:
    x, y = pos
    _ink(pdf, "primary", 18)
    _text(pdf, x, y, "Customer Invoice")
    pdf.set_draw_color(*COLORS["primary"])
    pdf.set_line_width(0.5)
    pdf.line(x, y + 3, x + 85, y + 3)
    return Position(x, y + 20)


def _labelled_section(pdf: FPDF, x: float, y: float, label: str, body: str) -> float:
    _ink(pdf, "text_gray", 11)
    _text(pdf, x, y, label)
    _ink(pdf, "text_dark", 9)
    y += 8
    for line in wrap_text(pdf, body, BILLING_WRAP_WIDTH):
        _text(pdf, x, y, line)
        y += BILLING_LINE
    return y


def draw_billing(pdf: FPDF, pos: Position, invoice: InvoiceData, note: str, tz: timezone, date_format: str) -> Position:
    x, y = pos
    right_x = pdf.w - BILLING_RIGHT_COLUMN_OFFSET

    _ink(pdf, "text_gray", 11)
    _text(pdf, x, y, "BILLED TO")

    _ink(pdf, "text_dark", 9)
    cursor = y + 12
    for value in (invoice.customer_name, invoice.business_name):
        for line in wrap_text(pdf, value, BILLING_WRAP_WIDTH):
            _text(pdf, x, cursor, line)
            cursor += BILLING_LINE
        cursor += 3

    if invoice.vat_number:
        _text(pdf, x, cursor, invoice.vat_number)
        cursor += 10

    if invoice.customer_message:
        cursor = _labelled_section(pdf, x, cursor, "Customer message:", invoice.customer_message)
        cursor += 3

    if note:
        cursor = _labelled_section(pdf, x, cursor, "Invoices to/notes:", note)

    _ink(pdf, "text_gray", 11)
    _text(pdf, right_x, y, "INVOICE DETAILS")
    _ink(pdf, "text_dark", 9)
    _text_block(
        pdf,
        [
            f"Invoice Number: #{invoice.order_number}",
            f"Date: {format_invoice_date(invoice.invoice_date, tz, date_format)}",
        ],
        right_x,
        y + 12,
    )

    return Position(x, cursor + 15)


def draw_items(pdf: FPDF, pos: Position, items: Sequence[InvoiceItem]) -> Position:
    x, y = pos
    page_w = pdf.w
    table_w = page_w - 2 * x

    _fill(pdf, "bg_light")
    pdf.rect(x, y, table_w, TABLE_HEADER_HEIGHT, style="F")

    _ink(pdf, "primary", 9)
    _text(pdf, x + 5, y + 7, "Description")
    _text(pdf, page_w - QTY_RIGHT, y + 7, "Qty", align="R")
    _text(pdf, page_w - UNIT_PRICE_RIGHT, y + 7, "Unit Price", align="R")
    _text(pdf, page_w - TOTAL_RIGHT, y + 7, "Total", align="R")

    cursor = y + 15
    _ink(pdf, "text_dark", 9)

    for index, item in enumerate(items):
        lines = wrap_text(pdf, item.description, DESCRIPTION_WRAP_WIDTH)
        height = row_height(len(lines))

        if index % 2 == 0:
            _fill(pdf, "bg_zebra")
            pdf.rect(x, cursor - 4, table_w, height, style="F")

        for i, line in enumerate(lines):
            _text(pdf, x + 5, cursor + i * ROW_LINE, line)

        _text(pdf, page_w - QTY_RIGHT, cursor, str(item.quantity), align="R")
        _text(pdf, page_w - UNIT_PRICE_RIGHT, cursor, format_currency(item.unit_price), align="R")
        _text(pdf, page_w - TOTAL_RIGHT, cursor, format_currency(item.total), align="R")

        cursor += height

    return Position(x, cursor + 5)


def draw_totals(pdf: FPDF, pos: Position, items: Sequence[InvoiceItem]) -> Position:
    x, y = pos
    page_w = pdf.w
    left = page_w - TOTALS_LEFT
    subtotal = format_currency(invoice_subtotal(items))

    pdf.set_draw_color(*COLORS["rule"])
    pdf.set_line_width(0.5)
    pdf.line(left, y, page_w - x, y)

    y += 10
    _ink(pdf, "text_gray", 9)
    _text(pdf, left, y, "Subtotal:")
    _ink(pdf, "text_dark", 9)
    _text(pdf, page_w - TOTAL_RIGHT, y, subtotal, align="R")

    y += 8
    _ink(pdf, "text_gray", 9)
    _text(pdf, left, y, "VAT:")
    _ink(pdf, "text_dark", 9)
    _text(pdf, page_w - TOTAL_RIGHT, y, "0% VAT", align="R")

    y += 12
    _fill(pdf, "primary")
    pdf.rect(left, y - 5, 80, 18, style="F", round_corners=True, corner_radius=2)

    _ink(pdf, "text_light", 10, "B")
    _text(pdf, page_w - 95, y + 5, "TOTAL:")
    _text(pdf, page_w - TOTAL_RIGHT, y + 5, subtotal, align="R")

    return Position(x, y + 20)


def draw_footer(pdf: FPDF, margin: float, profile: SenderProfile) -> None:
    footer_y = pdf.h - 15
    _ink(pdf, "text_gray", 8)
    _text(pdf, margin, footer_y, f"Generated by {profile.company_name} Invoice System")
    _text(pdf, pdf.w - margin, footer_y, "Page 1 of 1", align="R")


# ---------------------------
# Entry points
# ---------------------------

def build_invoice_pdf(
    invoice: InvoiceData,
    note: str,
    profile: SenderProfile,
    *,
    tz: timezone = DEFAULT_TZ,
    date_format: str = DEFAULT_DATE_FORMAT,
    compress: bool = True,
) -> RenderedDocument:
    """
    Render one invoice + note + sender letterhead to PDF bytes.

    The returned document is the only copy; pass it explicitly to whatever
    saves or uploads it.
    """
    pdf = FPDF(orientation="P", unit="mm", format="A4")
    pdf.set_auto_page_break(False)
    pdf.set_compression(compress)
    pdf.c_margin = 0  # wrap widths are exact
    pdf.set_title(f"Invoice #{invoice.order_number}")
    pdf.set_author(latin1_text(profile.company_name))
    pdf.set_creator("Takealot Invoice Service")
    pdf.add_page()

    pos = draw_header(pdf, MARGIN, profile)
    pos = draw_title(pdf, pos)
    pos = draw_billing(pdf, pos, invoice, note, tz, date_format)
    pos = draw_items(pdf, pos, invoice.invoice_items)
    pos = draw_totals(pdf, pos, invoice.invoice_items)
    draw_footer(pdf, MARGIN, profile)

    if pos.y > pdf.h - 20:
        log.warning("invoice %s overflows the page (cursor at %.1fmm)", invoice.order_number, pos.y)

    return RenderedDocument(content=bytes(pdf.output()), filename=document_filename(invoice))


def save_document(document: RenderedDocument, directory: str | Path) -> Path:
    path = ensure_dir(directory) / document.filename
    path.write_bytes(document.content)
    log.info("saved %s (%d bytes)", path, len(document.content))
    return path
