"""
Shipping Label PDF Generator

Renders a printable A4 shipping label for a shipped package using fpdf2.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from fpdf import FPDF

from app.core.domain import Address, utcnow
from app.domains.ecommerce.domain.entities import Order, Package

logger = logging.getLogger(__name__)


def _latin1(text: str | None) -> str:
    """Core PDF fonts only cover latin-1."""
    return (text or "").encode("latin-1", "replace").decode("latin-1")


class ShippingLabelGenerator:
    """
    Generates PDF shipping labels.

    Layout:
    - Carrier, tracking number and order reference
    - Barcode strip
    - Sender block (warehouse)
    - Recipient block
    - Weight / service / ship date row
    """

    # Page dimensions and margins (A4)
    PAGE_WIDTH = 210
    MARGIN = 20

    # Colors (RGB)
    PRIMARY_COLOR = (0, 0, 0)
    SECONDARY_COLOR = (100, 100, 100)
    HIGHLIGHT_FILL = (235, 235, 235)

    def __init__(self, sender_address: dict, clock: Callable[[], datetime] = utcnow):
        """
        Args:
            sender_address: Warehouse address (name, street, city, zip_code, country)
            clock: Source of the printed timestamps
        """
        self.sender_address = sender_address
        self.clock = clock

    def render(self, package: Package, order: Order) -> bytes:
        now = self.clock()
        shipped_at = package.shipped_at or now

        logger.info(f"Rendering label PDF: package={package.id}, tracking={package.tracking_number}")

        pdf = FPDF()
        pdf.add_page()
        pdf.set_auto_page_break(auto=True, margin=15)
        pdf.set_font("Helvetica", size=10)

        self._add_header(pdf, now)
        self._add_tracking(pdf, package, order)
        self._add_sender(pdf)
        self._add_recipient(pdf, package.shipping_address or order.shipping_address)
        self._add_parcel_info(pdf, package, shipped_at)
        self._add_footer(pdf, now)

        pdf_bytes = bytes(pdf.output())
        logger.info(f"Label PDF generated: {len(pdf_bytes)} bytes")
        return pdf_bytes

    def _content_width(self) -> float:
        return self.PAGE_WIDTH - 2 * self.MARGIN

    def _add_header(self, pdf: FPDF, now: datetime) -> None:
        pdf.set_y(self.MARGIN)
        pdf.set_font("Helvetica", "B", 20)
        pdf.set_text_color(*self.PRIMARY_COLOR)
        pdf.cell(130, 10, "SHIPPING LABEL", new_x="RIGHT")
        pdf.set_font("Helvetica", size=10)
        pdf.cell(0, 10, now.strftime("%d/%m/%Y"), align="R", new_x="LMARGIN", new_y="NEXT")
        pdf.ln(6)

    def _add_tracking(self, pdf: FPDF, package: Package, order: Order) -> None:
        width = self._content_width()
        pdf.set_fill_color(*self.HIGHLIGHT_FILL)
        pdf.set_font("Helvetica", "B", 14)
        carrier = _latin1(f"Carrier: {package.carrier.display_name}")
        pdf.cell(width, 9, carrier, fill=True, new_x="LMARGIN", new_y="NEXT")
        pdf.set_font("Helvetica", "B", 16)
        pdf.cell(width, 10, _latin1(f"Tracking: {package.tracking_number}"), fill=True, new_x="LMARGIN", new_y="NEXT")
        pdf.set_font("Helvetica", size=10)
        pdf.cell(width, 7, _latin1(f"Order: {order.id}"), fill=True, new_x="LMARGIN", new_y="NEXT")
        pdf.ln(6)

        # Barcode strip
        pdf.set_font("Courier", "B", 14)
        pdf.cell(
            width, 20, _latin1(f"|||  {package.tracking_number}  |||"), border=1, align="C", new_x="LMARGIN", new_y="NEXT"
        )
        pdf.ln(6)

    def _add_sender(self, pdf: FPDF) -> None:
        sender = self.sender_address
        lines = [
            sender.get("name", ""),
            sender.get("street", ""),
            f"{sender.get('zip_code', '')} {sender.get('city', '')}".strip(),
            sender.get("country", ""),
        ]
        self._address_block(pdf, "FROM", [line for line in lines if line], font_size=10, border_width=0.2)

    def _add_recipient(self, pdf: FPDF, address: Address | None) -> None:
        if address is None:
            lines = ["(no shipping address)"]
        else:
            lines = [
                address.street,
                f"{address.zip_code} {address.city}".strip(),
                address.state,
                address.country,
            ]
        self._address_block(pdf, "TO", [line for line in lines if line], font_size=14, border_width=0.6)

    def _address_block(self, pdf: FPDF, title: str, lines: list[str], font_size: int, border_width: float) -> None:
        width = self._content_width()
        pdf.set_line_width(border_width)
        top = pdf.get_y()

        pdf.set_font("Helvetica", "B", font_size - 2)
        pdf.set_x(self.MARGIN + 4)
        pdf.cell(0, 8, title, new_x="LMARGIN", new_y="NEXT")
        pdf.set_font("Helvetica", size=font_size)
        for line in lines:
            pdf.set_x(self.MARGIN + 4)
            pdf.cell(0, font_size * 0.5, _latin1(line), new_x="LMARGIN", new_y="NEXT")

        bottom = pdf.get_y() + 3
        pdf.rect(self.MARGIN, top, width, bottom - top)
        pdf.set_y(bottom + 5)
        pdf.set_line_width(0.2)

    def _add_parcel_info(self, pdf: FPDF, package: Package, shipped_at: datetime) -> None:
        column = self._content_width() / 3
        cells = [
            ("WEIGHT", f"{package.weight:.2f} kg"),
            ("SERVICE", package.carrier.display_name),
            ("SHIP DATE", shipped_at.strftime("%d/%m/%Y")),
        ]
        pdf.set_font("Helvetica", "B", 8)
        for label, _ in cells:
            pdf.cell(column, 6, label, border="LTR", new_x="RIGHT")
        pdf.ln()
        pdf.set_font("Helvetica", size=12)
        for _, value in cells:
            pdf.cell(column, 9, _latin1(value), border="LBR", new_x="RIGHT")
        pdf.ln(15)

    def _add_footer(self, pdf: FPDF, now: datetime) -> None:
        pdf.set_font("Helvetica", size=8)
        pdf.set_text_color(*self.SECONDARY_COLOR)
        pdf.cell(0, 5, f"Generated {now.strftime('%d/%m/%Y %H:%M')} UTC", align="C", new_x="LMARGIN", new_y="NEXT")
