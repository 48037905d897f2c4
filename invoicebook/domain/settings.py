"""Settings Domain Entities

Business profile, payment details, invoice defaults and app preferences.
``InvoiceSettings`` also carries the invoice numbering sequence.
"""

from decimal import Decimal
from typing import Annotated

from pydantic import BeforeValidator, Field

from invoicebook.domain.base import BaseModel, Text, fallback
from invoicebook.domain.money import Amount, parse_amount

DEFAULT_CURRENCY = "₹"
DEFAULT_TAX_RATE = Decimal("18")
DEFAULT_PREFIX = "INV-"
DEFAULT_PAYMENT_TERMS = 30


def whole_days(value) -> int:
    return int(parse_amount(value))


def _sequence_number(value) -> int:
    number = int(parse_amount(value))
    return number if number >= 1 else 1


class BusinessProfile(BaseModel):
    """Issuer details printed on every invoice"""

    name: Text = ""
    email: Text = ""
    phone: Text = ""
    address: Text = ""
    gst: Text = ""


class PaymentDetails(BaseModel):
    """Where the client should pay"""

    upi: Text = ""
    bank: Text = ""
    account: Text = ""
    ifsc: Text = ""


class InvoiceSettings(BaseModel):
    """
    Invoice defaults and numbering sequence

    Domain Rules:
    - next_number is a positive counter, advanced once per committed invoice;
      a stored value that is missing or below 1 reads as 1
    - A number is never reused, even if the invoice carrying it goes away
    - tax_rate is only the default for new drafts; invoices snapshot their own rate
    """

    currency: Text = DEFAULT_CURRENCY
    tax_rate: Amount = DEFAULT_TAX_RATE
    prefix: Text = DEFAULT_PREFIX
    payment_terms: Annotated[int, BeforeValidator(whole_days)] = DEFAULT_PAYMENT_TERMS
    next_number: Annotated[int, BeforeValidator(_sequence_number)] = Field(default=1, ge=1)

    def next_invoice_number(self) -> str:
        """Prefix plus the counter zero-padded to 4 digits, never truncated"""
        return f"{self.prefix}{self.next_number:04d}"

    def advance(self) -> None:
        self.next_number += 1


class AppPreferences(BaseModel):
    dark_mode: Annotated[bool, fallback(lambda: False)] = False


class Settings(BaseModel):
    """
    All settings sections

    Each section and each field resolves on its own: a section that is not an
    object reads as that section's defaults, and the others are kept.
    """

    profile: Annotated[BusinessProfile, fallback(BusinessProfile)] = Field(default_factory=BusinessProfile)
    payment: Annotated[PaymentDetails, fallback(PaymentDetails)] = Field(default_factory=PaymentDetails)
    invoice: Annotated[InvoiceSettings, fallback(InvoiceSettings)] = Field(default_factory=InvoiceSettings)
    app: Annotated[AppPreferences, fallback(AppPreferences)] = Field(default_factory=AppPreferences)
