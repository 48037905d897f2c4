"""Request schemas for Settings API

Numeric invoice defaults are accepted as typed; the settings use case reads
them leniently, so malformed numbers never fail the request.
"""

from typing import Any, Optional
from pydantic import BaseModel, Field


class BusinessProfileSchema(BaseModel):
    name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    gst: str = ""


class PaymentDetailsSchema(BaseModel):
    upi: str = ""
    bank: str = ""
    account: str = ""
    ifsc: str = ""


class InvoiceDefaultsSchema(BaseModel):
    currency: Optional[str] = None
    tax_rate: Optional[Any] = Field(default=None, description="Default tax percentage, e.g. 18")
    prefix: Optional[str] = None
    payment_terms: Optional[Any] = Field(default=None, description="Days until due, e.g. 30")


class UpdateSettingsRequestSchema(BaseModel):
    """
    Request schema for PUT /settings

    Omitted sections are left unchanged.
    """

    profile: Optional[BusinessProfileSchema] = None
    payment: Optional[PaymentDetailsSchema] = None
    invoice: Optional[InvoiceDefaultsSchema] = None
    dark_mode: Optional[bool] = None

    class Config:
        json_schema_extra = {
            "example": {
                "profile": {"name": "Sharma Design Studio", "email": "hello@sharma.example"},
                "payment": {"upi": "sharma@okbank"},
                "invoice": {"tax_rate": "18", "prefix": "INV-", "payment_terms": 30}
            }
        }
