"""Invoice Domain Entity

Tracks finalized (or saved-as-draft) invoices and their payment status.
"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Annotated, List, Optional

from pydantic import Field, field_validator

from invoicebook.domain.base import BaseModel, Text, fallback, generate_id, utc_now
from invoicebook.domain.line_item import LineItem
from invoicebook.domain.money import Amount, Money


class InvoiceStatus(str, Enum):
    """Invoice status types"""
    DRAFT = "draft"
    SENT = "sent"
    PENDING = "pending"
    PAID = "paid"


# Blank or unparseable dates read as unset
StoredDate = Annotated[Optional[date], fallback(lambda: None)]


# Allowed status changes; paid is terminal
STATUS_TRANSITIONS = {
    InvoiceStatus.DRAFT: {InvoiceStatus.SENT},
    InvoiceStatus.SENT: {InvoiceStatus.PENDING, InvoiceStatus.PAID},
    InvoiceStatus.PENDING: {InvoiceStatus.SENT, InvoiceStatus.PAID},
    InvoiceStatus.PAID: set(),
}


class Invoice(BaseModel):
    """
    Invoice - A committed invoice

    Domain Rules:
    - subtotal/tax_amount/discount/total/tax_rate are frozen copies of the
      draft at commit time; later settings changes never alter them
    - number comes from the settings sequence and is unique
    - client_id may dangle (client removed later); that is tolerated
    - Status changes follow STATUS_TRANSITIONS
    - Stored fields that cannot be read fall back to their defaults (an
      unknown status reads as draft) so the record itself is never lost
    """

    id: Text = Field(default_factory=generate_id)
    number: Text = ""
    client_id: Text = ""
    issue_date: StoredDate = Field(default=None, alias="date")
    due_date: StoredDate = None
    line_items: List[LineItem] = Field(default_factory=list)
    subtotal: Money = Decimal("0.00")
    tax_rate: Amount = Decimal("0")
    tax_amount: Money = Decimal("0.00")
    discount: Money = Decimal("0.00")
    total: Money = Decimal("0.00")
    notes: Text = ""
    status: Annotated[InvoiceStatus, fallback(lambda: InvoiceStatus.DRAFT)] = InvoiceStatus.DRAFT
    created_at: Annotated[datetime, fallback(utc_now)] = Field(default_factory=utc_now)

    @field_validator("line_items", mode="before")
    @classmethod
    def keep_readable_items(cls, v):
        if not isinstance(v, list):
            return []
        return [item for item in v if isinstance(item, (dict, LineItem))]

    def can_transition_to(self, status: InvoiceStatus) -> bool:
        return status == self.status or status in STATUS_TRANSITIONS[self.status]
