"""Data Transfer Objects for Invoicing Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, List, Optional
from pydantic import BaseModel, Field

from invoicebook.domain.client import Client
from invoicebook.domain.document import UNKNOWN_CLIENT, DocumentModel
from invoicebook.domain.draft import DraftTotals, InvoiceDraft, InvoiceMetadata
from invoicebook.domain.invoice import Invoice, InvoiceStatus
from invoicebook.domain.money import format_money
from invoicebook.domain.settings import DEFAULT_CURRENCY, BusinessProfile, PaymentDetails, Settings
from invoicebook.domain.stats import ClientSummary, DashboardStats


class CommitInvoiceCommandDTO(BaseModel):
    """
    Command DTO for committing the active draft

    Used as input to FinalizeInvoice and SaveDraftInvoice. Dates left out
    keep the defaults the draft was started with.
    """

    client_id: Optional[str] = Field(
        default=None,
        description="Client the invoice is billed to (required to finalize)"
    )

    issue_date: Optional[date] = Field(
        default=None,
        description="Invoice date"
    )

    due_date: Optional[date] = Field(
        default=None,
        description="Payment due date"
    )

    notes: Optional[str] = Field(
        default=None,
        description="Free-text notes printed on the invoice"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "client_id": "1735689600000",
                "issue_date": "2025-01-01",
                "due_date": "2025-01-31",
                "notes": "Thank you for your business"
            }
        }


class InvoiceLineDTO(BaseModel):
    """Line item in invoice responses"""

    id: str
    description: str
    quantity: Decimal
    rate: Decimal
    amount: Decimal


class InvoiceResponseDTO(BaseModel):
    """
    Response DTO for invoice operations

    Returned by FinalizeInvoice, SaveDraftInvoice, UpdateInvoiceStatus.
    persisted is False when the snapshot could not be saved; the invoice
    still exists in memory and a later save will include it.
    """

    invoice_id: str = Field(..., description="Invoice ID")
    number: str = Field(..., description="Invoice number (e.g., INV-0001)")
    client_id: str = Field(..., description="Referenced client ID")
    client_name: str = Field(..., description="Client name or 'Unknown Client'")
    status: str = Field(..., description="Invoice status (draft, sent, pending, paid)")
    issue_date: Optional[date] = Field(default=None, description="Invoice date")
    due_date: Optional[date] = Field(default=None, description="Payment due date")
    line_items: List[InvoiceLineDTO] = Field(default_factory=list)
    subtotal: Decimal
    tax_rate: Decimal
    tax_amount: Decimal
    discount: Decimal
    total: Decimal
    notes: str = ""
    created_at: datetime
    persisted: bool = True

    class Config:
        json_schema_extra = {
            "example": {
                "invoice_id": "1735689600123",
                "number": "INV-0001",
                "client_id": "1735689600000",
                "client_name": "Acme Traders",
                "status": "sent",
                "issue_date": "2025-01-01",
                "due_date": "2025-01-31",
                "line_items": [
                    {"id": "1735689600050", "description": "Design work",
                     "quantity": "2", "rate": "100.005", "amount": "200.01"}
                ],
                "subtotal": "200.01",
                "tax_rate": "18",
                "tax_amount": "36.00",
                "discount": "0.00",
                "total": "236.01",
                "notes": "",
                "created_at": "2025-01-01T10:00:00Z",
                "persisted": True
            }
        }

    @classmethod
    def from_invoice(
        cls, invoice: Invoice, client: Optional[Client], persisted: bool = True
    ) -> "InvoiceResponseDTO":
        return cls(
            invoice_id=invoice.id,
            number=invoice.number,
            client_id=invoice.client_id,
            client_name=client.name if client and client.name else UNKNOWN_CLIENT,
            status=invoice.status.value,
            issue_date=invoice.issue_date,
            due_date=invoice.due_date,
            line_items=[
                InvoiceLineDTO(
                    id=item.id,
                    description=item.description,
                    quantity=item.quantity,
                    rate=item.rate,
                    amount=item.amount,
                )
                for item in invoice.line_items
            ],
            subtotal=invoice.subtotal,
            tax_rate=invoice.tax_rate,
            tax_amount=invoice.tax_amount,
            discount=invoice.discount,
            total=invoice.total,
            notes=invoice.notes,
            created_at=invoice.created_at,
            persisted=persisted,
        )


class UpdateInvoiceStatusCommandDTO(BaseModel):
    """Command DTO for moving an invoice to another status"""

    invoice_id: str = Field(..., description="Invoice ID")
    status: InvoiceStatus = Field(..., description="Target status")


class InvoiceSummaryDTO(BaseModel):
    """Invoice list row"""

    invoice_id: str
    number: str
    client_name: str
    issue_date: Optional[date] = None
    total: Decimal
    total_display: str
    status: str

    @classmethod
    def from_invoice(
        cls, invoice: Invoice, client: Optional[Client], currency: str
    ) -> "InvoiceSummaryDTO":
        return cls(
            invoice_id=invoice.id,
            number=invoice.number,
            client_name=client.name if client and client.name else UNKNOWN_CLIENT,
            issue_date=invoice.issue_date,
            total=invoice.total,
            total_display=format_money(invoice.total, currency or DEFAULT_CURRENCY),
            status=invoice.status.value,
        )


class DashboardResponseDTO(BaseModel):
    """Response DTO for the dashboard"""

    stats: DashboardStats
    client_count: int
    recent_invoices: List[InvoiceSummaryDTO] = Field(default_factory=list)
    clients: List[ClientSummary] = Field(default_factory=list)
    reference_date: date


class CreateClientCommandDTO(BaseModel):
    """Command DTO for adding a client"""

    name: str = Field(..., min_length=1, description="Client name")
    email: str = Field(default="", description="Contact email")
    phone: str = Field(default="", description="Contact phone")
    address: str = Field(default="", description="Postal address")
    gst: str = Field(default="", description="GST registration number")

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Acme Traders",
                "email": "accounts@acme.example",
                "phone": "+91 98765 43210",
                "address": "12 MG Road, Bengaluru",
                "gst": "29ABCDE1234F1Z5"
            }
        }


class ClientResponseDTO(BaseModel):
    client: Client
    persisted: bool = True


class InvoiceDefaultsDTO(BaseModel):
    """
    Invoice settings a user may edit

    next_number is not editable: it only moves forward through committed
    invoices.
    """

    currency: Optional[str] = None
    tax_rate: Optional[Any] = Field(default=None, description="Raw form input, read leniently")
    prefix: Optional[str] = None
    payment_terms: Optional[Any] = Field(default=None, description="Days until due, read leniently")


class UpdateSettingsCommandDTO(BaseModel):
    """Command DTO for settings; omitted sections stay unchanged"""

    profile: Optional[BusinessProfile] = None
    payment: Optional[PaymentDetails] = None
    invoice: Optional[InvoiceDefaultsDTO] = None
    dark_mode: Optional[bool] = None


class SettingsResponseDTO(BaseModel):
    settings: Settings
    persisted: bool = True


class DocumentResponseDTO(BaseModel):
    """Response DTO for a projected invoice document"""

    invoice_id: str
    document: DocumentModel


class InvoicePdfResponseDTO(BaseModel):
    """Response DTO for a rendered invoice PDF"""

    invoice_id: str = Field(..., description="Invoice ID")
    number: str = Field(..., description="Invoice number")
    file_name: str = Field(..., description="Suggested download name (invoice_<timestamp>.pdf)")
    pdf_base64: str = Field(..., description="PDF document, base64 encoded")
    generated_at: datetime


class ExportDataResponseDTO(BaseModel):
    """Response DTO for the JSON data export"""

    file_name: str = Field(..., description="Suggested download name (invoice_data_<timestamp>.json)")
    content: str = Field(..., description="Full snapshot as JSON")
    invoice_count: int
    client_count: int
    exported_at: datetime


class DraftResponseDTO(BaseModel):
    """
    Response DTO for the active draft

    Totals are always current: every draft edit recalculates them.
    """

    invoice_number: str = Field(..., description="Number the draft will get when committed")
    issue_date: Optional[date] = None
    due_date: Optional[date] = None
    notes: str = ""
    line_items: List[InvoiceLineDTO] = Field(default_factory=list)
    totals: DraftTotals

    @classmethod
    def from_draft(
        cls, draft: InvoiceDraft, metadata: Optional[InvoiceMetadata], invoice_number: str
    ) -> "DraftResponseDTO":
        metadata = metadata or InvoiceMetadata()
        return cls(
            invoice_number=invoice_number,
            issue_date=metadata.issue_date,
            due_date=metadata.due_date,
            notes=metadata.notes,
            line_items=[
                InvoiceLineDTO(
                    id=item.id,
                    description=item.description,
                    quantity=item.quantity,
                    rate=item.rate,
                    amount=item.amount,
                )
                for item in draft.line_items
            ],
            totals=draft.totals(),
        )


class UpdateDraftItemCommandDTO(BaseModel):
    """Command DTO for a single line item field edit"""

    item_id: str
    field: str = Field(..., description="description, quantity or rate")
    value: Optional[Any] = Field(default=None, description="Raw form input")


class DraftAdjustmentsCommandDTO(BaseModel):
    """Tax rate and discount for the draft; omitted values keep the current ones"""

    tax_rate: Optional[Any] = None
    discount: Optional[Any] = None
