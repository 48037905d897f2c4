"""ReportLab PDF Rendering Service Implementation

Implements document rendering using ReportLab library.
"""

from io import BytesIO
from typing import List

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, A5
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import mm
from reportlab.platypus import (
    SimpleDocTemplate,
    Table,
    TableStyle,
    Paragraph,
    Spacer,
)

from invoicebook.app.services.pdf_service import PdfService
from invoicebook.domain.document import DocumentLayout, DocumentModel, PartyBlock

ACCENT = colors.HexColor("#DC2626")
MUTED = colors.HexColor("#333333")
RULE = colors.HexColor("#E5E5E5")

# ReportLab's base-14 fonts cannot draw the rupee sign
_GLYPH_FALLBACKS = {"₹": "Rs."}


def _printable(text: str) -> str:
    for glyph, fallback in _GLYPH_FALLBACKS.items():
        text = text.replace(glyph, fallback)
    return (
        text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
    )


class ReportLabPdfService(PdfService):
    """
    ReportLab implementation of PdfService

    Full layout: A4, serif, itemized table with quantity and rate columns.
    Compact layout: A5, sans-serif, one stacked row per item.
    """

    def render_document(self, document: DocumentModel) -> bytes:
        """
        Render a document model to PDF

        Args:
            document: Projected invoice document

        Returns:
            PDF document as bytes
        """
        compact = document.layout == DocumentLayout.COMPACT
        margin = (10 if compact else 20) * mm

        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A5 if compact else A4,
            rightMargin=margin,
            leftMargin=margin,
            topMargin=margin,
            bottomMargin=margin,
            title=f"Invoice {document.header.number}",
        )

        styles = getSampleStyleSheet()
        font = "Helvetica" if compact else "Times-Roman"
        bold_font = "Helvetica-Bold" if compact else "Times-Bold"
        base_size = 9 if compact else 11

        title_style = ParagraphStyle(
            "TitleStyle",
            parent=styles["Heading1"],
            fontName=bold_font,
            fontSize=20 if compact else 28,
            textColor=ACCENT,
            spaceAfter=6,
        )
        heading_style = ParagraphStyle(
            "HeadingStyle",
            parent=styles["Heading3"],
            fontName=bold_font,
            fontSize=base_size + 2,
            textColor=ACCENT,
            spaceAfter=4,
        )
        normal_style = ParagraphStyle(
            "NormalStyle",
            parent=styles["Normal"],
            fontName=font,
            fontSize=base_size,
            textColor=MUTED,
        )
        bold_style = ParagraphStyle(
            "BoldStyle",
            parent=normal_style,
            fontName=bold_font,
            textColor=colors.black,
        )

        elements = []

        # Header
        elements.append(Paragraph(document.header.title, title_style))
        elements.append(
            Paragraph(f"Invoice #: <b>{_printable(document.header.number)}</b>", normal_style)
        )
        if document.header.date:
            elements.append(Paragraph(f"Date: {document.header.date}", normal_style))
        if document.header.due_date:
            elements.append(Paragraph(f"Due Date: {document.header.due_date}", normal_style))
        elements.append(Spacer(1, 6 * mm))

        # Parties
        parties = Table(
            [[
                self._party(document.issuer, heading_style, bold_style, normal_style),
                self._party(document.recipient, heading_style, bold_style, normal_style),
            ]],
            colWidths=[doc.width / 2, doc.width / 2],
        )
        parties.setStyle(TableStyle([("VALIGN", (0, 0), (-1, -1), "TOP")]))
        elements.append(parties)
        elements.append(Spacer(1, 6 * mm))

        # Items
        if compact:
            item_data = [["Item", "Amount"]]
            for row in document.rows:
                item_data.append([
                    Paragraph(
                        f"<b>{_printable(row.description)}</b><br/>"
                        f"{_printable(row.quantity)} x {_printable(row.rate)}",
                        normal_style,
                    ),
                    _printable(row.amount),
                ])
            col_widths = [doc.width - 30 * mm, 30 * mm]
        else:
            item_data = [["Description", "Qty", "Rate", "Amount"]]
            for row in document.rows:
                item_data.append([
                    Paragraph(_printable(row.description), normal_style),
                    _printable(row.quantity),
                    _printable(row.rate),
                    _printable(row.amount),
                ])
            col_widths = [80 * mm, 20 * mm, 35 * mm, 35 * mm]

        item_table = Table(item_data, colWidths=col_widths, repeatRows=1)
        item_table.setStyle(
            TableStyle(
                [
                    # Header row
                    ("BACKGROUND", (0, 0), (-1, 0), ACCENT),
                    ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                    ("FONTNAME", (0, 0), (-1, 0), bold_font),
                    ("FONTNAME", (0, 1), (-1, -1), font),
                    ("FONTSIZE", (0, 0), (-1, -1), base_size),
                    # Data rows
                    ("ALIGN", (1, 1), (-1, -1), "RIGHT"),
                    ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                    ("LINEBELOW", (0, 1), (-1, -1), 0.5, RULE),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
                    ("TOPPADDING", (0, 0), (-1, -1), 6),
                    (
                        "ROWBACKGROUNDS",
                        (0, 1),
                        (-1, -1),
                        [colors.HexColor("#FAFAFA"), colors.white],
                    ),
                ]
            )
        )
        elements.append(item_table)
        elements.append(Spacer(1, 4 * mm))

        # Totals
        total_data = [[line.label + ":", _printable(line.value)] for line in document.totals]
        total_table = Table(total_data, colWidths=[None, 35 * mm], hAlign="RIGHT")
        total_table.setStyle(
            TableStyle(
                [
                    ("FONTNAME", (0, 0), (-1, -2), font),
                    ("FONTNAME", (0, -1), (-1, -1), bold_font),
                    ("FONTSIZE", (0, 0), (-1, -1), base_size),
                    ("FONTSIZE", (0, -1), (-1, -1), base_size + 2),
                    ("TEXTCOLOR", (1, -1), (1, -1), ACCENT),
                    ("ALIGN", (0, 0), (-1, -1), "RIGHT"),
                    ("LINEABOVE", (0, -1), (-1, -1), 1.5, colors.black),
                    ("TOPPADDING", (0, 0), (-1, -1), 4),
                ]
            )
        )
        elements.append(total_table)

        if document.notes:
            elements.append(Spacer(1, 6 * mm))
            elements.append(Paragraph("Notes:", heading_style))
            elements.append(Paragraph(_printable(document.notes), normal_style))

        if document.payment:
            elements.append(Spacer(1, 6 * mm))
            elements.append(Paragraph("PAYMENT INFORMATION", heading_style))
            payment = document.payment
            if payment.bank:
                elements.append(Paragraph(f"<b>Bank Name:</b> {_printable(payment.bank.bank)}", normal_style))
                elements.append(Paragraph(f"<b>Account Number:</b> {_printable(payment.bank.account)}", normal_style))
                elements.append(Paragraph(f"<b>IFSC Code:</b> {_printable(payment.bank.ifsc)}", normal_style))
            if payment.upi_id:
                elements.append(Paragraph(f"<b>UPI:</b> {_printable(payment.upi_id)}", normal_style))
            if payment.upi_uri:
                elements.append(Paragraph(_printable(payment.upi_uri), normal_style))

        doc.build(elements)
        pdf_bytes = buffer.getvalue()
        buffer.close()

        return pdf_bytes

    def _party(self, block: PartyBlock, heading_style, bold_style, normal_style) -> List:
        flowables = [
            Paragraph(f"{block.heading}:", heading_style),
            Paragraph(_printable(block.name), bold_style),
        ]
        for line in block.lines:
            flowables.append(
                Paragraph(f"{line.label}: {_printable(line.value)}", normal_style)
            )
        return flowables
