"""Request schemas for Invoice API

Pydantic models for validating incoming HTTP requests. Numeric draft inputs
are accepted as raw form values; the draft parses them leniently.
"""

from datetime import date
from typing import Any, Literal, Optional
from pydantic import BaseModel, Field

from invoicebook.domain.invoice import InvoiceStatus


class CommitDraftRequestSchema(BaseModel):
    """
    Request schema for finalizing or saving the draft

    Used for POST /invoices/draft/finalize and POST /invoices/draft/save.
    """

    client_id: Optional[str] = Field(
        default=None,
        description="Client to bill (required to finalize)"
    )

    issue_date: Optional[date] = Field(
        default=None,
        description="Invoice date (defaults to the date the draft was started)"
    )

    due_date: Optional[date] = Field(
        default=None,
        description="Due date (defaults to invoice date + payment terms)"
    )

    notes: Optional[str] = Field(
        default=None,
        description="Notes printed on the invoice"
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


class UpdateDraftItemRequestSchema(BaseModel):
    """
    Request schema for editing a draft line item

    Used for PATCH /invoices/draft/items/{item_id} endpoint.
    """

    field: Literal["description", "quantity", "rate"] = Field(
        ...,
        description="Field to edit"
    )

    value: Optional[Any] = Field(
        default=None,
        description="New value as entered; invalid numbers count as 0"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "field": "rate",
                "value": "1500.50"
            }
        }


class DraftAdjustmentsRequestSchema(BaseModel):
    """
    Request schema for draft tax rate and discount

    Used for PUT /invoices/draft/adjustments endpoint.
    """

    tax_rate: Optional[Any] = Field(
        default=None,
        description="Tax percentage, e.g. 18"
    )

    discount: Optional[Any] = Field(
        default=None,
        description="Absolute discount subtracted after tax"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "tax_rate": "18",
                "discount": "10.00"
            }
        }


class UpdateStatusRequestSchema(BaseModel):
    """Request schema for PATCH /invoices/{invoice_id}/status"""

    status: InvoiceStatus = Field(..., description="draft, sent, pending or paid")
