"""Invoice document projection

Turns an invoice, its client and the business settings into an ordered,
renderer-agnostic document model. Which optional blocks and lines appear is
decided here; how they look is up to the renderer.
"""

from datetime import date
from enum import Enum
from typing import List, Optional
from urllib.parse import quote

from pydantic import Field

from invoicebook.domain.base import BaseModel
from invoicebook.domain.client import Client
from invoicebook.domain.invoice import Invoice
from invoicebook.domain.money import format_money, plain_number
from invoicebook.domain.settings import DEFAULT_CURRENCY, Settings

UNKNOWN_CLIENT = "Unknown Client"
DEFAULT_BUSINESS_NAME = "Your Business"
UPI_PAYEE_FALLBACK = "Invoice"


class DocumentLayout(str, Enum):
    COMPACT = "compact"
    FULL = "full"


class DocumentField(BaseModel):
    label: str
    value: str


class DocumentHeader(BaseModel):
    title: str = "INVOICE"
    number: str
    date: str
    due_date: str


class PartyBlock(BaseModel):
    heading: str
    name: str
    lines: List[DocumentField] = Field(default_factory=list)


class DocumentRow(BaseModel):
    description: str
    quantity: str
    rate: str
    amount: str


class TotalLine(BaseModel):
    kind: str
    label: str
    value: str


class BankBlock(BaseModel):
    bank: str
    account: str
    ifsc: str


class PaymentBlock(BaseModel):
    bank: Optional[BankBlock] = None
    upi_id: Optional[str] = None
    upi_uri: Optional[str] = None


class DocumentModel(BaseModel):
    layout: DocumentLayout
    header: DocumentHeader
    issuer: PartyBlock
    recipient: PartyBlock
    rows: List[DocumentRow] = Field(default_factory=list)
    totals: List[TotalLine] = Field(default_factory=list)
    notes: Optional[str] = None
    payment: Optional[PaymentBlock] = None


def format_display_date(value: Optional[date]) -> str:
    """Jan 5, 2025 style; empty when unset"""
    if value is None:
        return ""
    return f"{value:%b} {value.day}, {value.year}"


def _present(*pairs) -> List[DocumentField]:
    return [DocumentField(label=label, value=value) for label, value in pairs if value]


def upi_payment_uri(upi_id: str, business_name: str, total) -> str:
    """Hand-assembled UPI intent; only the payee name is URL-encoded"""
    payee = quote(business_name or UPI_PAYEE_FALLBACK, safe="!*'()")
    return f"upi://pay?pa={upi_id}&pn={payee}&am={plain_number(total)}&cu=INR"


def project(
    invoice: Invoice,
    client: Optional[Client],
    settings: Settings,
    compact: bool = False,
) -> DocumentModel:
    """
    Project an invoice into a document model

    Args:
        invoice: Committed invoice
        client: The referenced client, or None when it no longer exists
        settings: Business profile, payment details and currency
        compact: Narrow layout (omits the client's GST line)

    Returns:
        DocumentModel
    """
    currency = settings.invoice.currency or DEFAULT_CURRENCY
    profile = settings.profile
    payment = settings.payment

    header = DocumentHeader(
        number=invoice.number,
        date=format_display_date(invoice.issue_date),
        due_date=format_display_date(invoice.due_date),
    )

    if compact:
        issuer_lines = _present(
            ("Phone", profile.phone),
            ("Email", profile.email),
            ("Address", profile.address),
            ("GST", profile.gst),
        )
    else:
        issuer_lines = _present(
            ("Address", profile.address),
            ("Phone", profile.phone),
            ("Email", profile.email),
            ("GST", profile.gst),
        )
    issuer = PartyBlock(
        heading="From",
        name=profile.name or DEFAULT_BUSINESS_NAME,
        lines=issuer_lines,
    )

    if client is None:
        recipient = PartyBlock(heading="Bill To", name=UNKNOWN_CLIENT)
    elif compact:
        recipient = PartyBlock(
            heading="Bill To",
            name=client.name or UNKNOWN_CLIENT,
            lines=_present(
                ("Phone", client.phone),
                ("Email", client.email),
                ("Address", client.address),
            ),
        )
    else:
        recipient = PartyBlock(
            heading="Bill To",
            name=client.name or UNKNOWN_CLIENT,
            lines=_present(
                ("Address", client.address),
                ("Phone", client.phone),
                ("Email", client.email),
                ("GST", client.gst),
            ),
        )

    rows = [
        DocumentRow(
            description=item.description,
            quantity=plain_number(item.quantity),
            rate=format_money(item.rate, currency),
            amount=format_money(item.amount, currency),
        )
        for item in invoice.line_items
    ]

    totals = [TotalLine(kind="subtotal", label="Subtotal", value=format_money(invoice.subtotal, currency))]
    if invoice.tax_rate > 0:
        totals.append(
            TotalLine(
                kind="tax",
                label=f"Tax ({plain_number(invoice.tax_rate)}%)",
                value=format_money(invoice.tax_amount, currency),
            )
        )
    if invoice.discount > 0:
        totals.append(
            TotalLine(
                kind="discount",
                label="Discount",
                value=f"-{format_money(invoice.discount, currency)}",
            )
        )
    totals.append(TotalLine(kind="total", label="Total", value=format_money(invoice.total, currency)))

    payment_block = None
    if payment.bank or payment.upi:
        payment_block = PaymentBlock()
        if payment.bank:
            payment_block.bank = BankBlock(
                bank=payment.bank,
                account=payment.account,
                ifsc=payment.ifsc,
            )
        if payment.upi:
            payment_block.upi_id = payment.upi
            if invoice.total > 0:
                payment_block.upi_uri = upi_payment_uri(payment.upi, profile.name, invoice.total)

    return DocumentModel(
        layout=DocumentLayout.COMPACT if compact else DocumentLayout.FULL,
        header=header,
        issuer=issuer,
        recipient=recipient,
        rows=rows,
        totals=totals,
        notes=invoice.notes or None,
        payment=payment_block,
    )
