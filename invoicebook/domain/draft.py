"""Invoice Draft: line-item ledger and calculation engine

The draft is the single in-progress invoice of a workspace. Every ledger
mutation recalculates the totals before returning, so totals read from a
draft are always current.
"""

from datetime import date, timedelta
from decimal import Decimal
from typing import Any, List, Optional

from pydantic import Field

from libs.result import Result, Return, Error
from invoicebook.domain.base import BaseModel, Text, generate_id, utc_now
from invoicebook.domain.invoice import Invoice, InvoiceStatus
from invoicebook.domain.line_item import LineItem
from invoicebook.domain.money import Money, ZERO, parse_amount, round2
from invoicebook.domain.settings import InvoiceSettings

EDITABLE_FIELDS = ("description", "quantity", "rate")


class DraftTotals(BaseModel):
    subtotal: Money
    tax_rate: Decimal
    tax_amount: Money
    discount_amount: Money
    total: Money


class InvoiceMetadata(BaseModel):
    """Header fields collected alongside a draft"""

    issue_date: Optional[date] = Field(default=None, alias="date")
    due_date: Optional[date] = None
    notes: Text = ""


def default_metadata(settings: InvoiceSettings, today: Optional[date] = None) -> InvoiceMetadata:
    """Dated today, due after the configured payment terms"""
    today = today or date.today()
    return InvoiceMetadata(
        issue_date=today,
        due_date=today + timedelta(days=settings.payment_terms),
    )


class InvoiceDraft(BaseModel):
    """
    Invoice Draft - Working state of the invoice being composed

    Domain Rules:
    - subtotal = round2(sum of round2(item.amount))
    - tax_amount = round2(subtotal * tax_rate / 100)
    - total = round2(subtotal + tax_amount - discount_amount)
    - Discount is an absolute amount subtracted after tax
    - Unknown item ids are ignored
    """

    line_items: List[LineItem] = Field(default_factory=list)
    subtotal: Money = Decimal("0.00")
    tax_rate: Decimal = ZERO
    tax_amount: Money = Decimal("0.00")
    discount_amount: Money = Decimal("0.00")
    total: Money = Decimal("0.00")

    def find_item(self, item_id: str) -> Optional[LineItem]:
        for item in self.line_items:
            if item.id == item_id:
                return item
        return None

    def add_item(self) -> str:
        """Append a blank item (quantity 1, rate 0) and return its id"""
        item = LineItem(id=generate_id())
        self.line_items.append(item)
        self.recalculate()
        return item.id

    def update_item(self, item_id: str, field: str, raw_value: Any) -> None:
        """
        Apply one field edit from the form

        Args:
            item_id: Target item, silently ignored when absent
            field: description, quantity or rate
            raw_value: Unparsed input; numbers go through parse_amount
        """
        if field not in EDITABLE_FIELDS:
            raise ValueError(f"Unknown line item field: {field}")

        item = self.find_item(item_id)
        if item is None:
            return

        if field == "description":
            item.description = "" if raw_value is None else str(raw_value)
        else:
            setattr(item, field, parse_amount(raw_value))

        item.compute_amount()
        self.recalculate()

    def remove_item(self, item_id: str) -> None:
        self.line_items = [item for item in self.line_items if item.id != item_id]
        self.recalculate()

    def recalculate(self, tax_rate: Any = None, discount: Any = None) -> DraftTotals:
        """
        Recompute subtotal, tax and total in place

        Args:
            tax_rate: Percentage; omitted keeps the last one used
            discount: Absolute amount; omitted keeps the last one used

        Returns:
            DraftTotals with the values written to the draft
        """
        if tax_rate is not None:
            self.tax_rate = parse_amount(tax_rate)
        if discount is not None:
            self.discount_amount = round2(parse_amount(discount))

        # Each item amount is rounded again before summing
        running = ZERO
        for item in self.line_items:
            running = running + round2(item.amount)
        self.subtotal = round2(running)
        self.tax_amount = round2(self.subtotal * self.tax_rate / 100)
        self.total = round2(self.subtotal + self.tax_amount - self.discount_amount)

        return self.totals()

    def totals(self) -> DraftTotals:
        return DraftTotals(
            subtotal=self.subtotal,
            tax_rate=self.tax_rate,
            tax_amount=self.tax_amount,
            discount_amount=self.discount_amount,
            total=self.total,
        )


def _build_invoice(
    draft: InvoiceDraft,
    client_id: str,
    metadata: InvoiceMetadata,
    settings: InvoiceSettings,
    line_items: List[LineItem],
    status: InvoiceStatus,
) -> Invoice:
    return Invoice(
        id=generate_id(),
        number=settings.next_invoice_number(),
        client_id=client_id or "",
        issue_date=metadata.issue_date,
        due_date=metadata.due_date,
        line_items=[item.model_copy() for item in line_items],
        subtotal=draft.subtotal,
        tax_rate=draft.tax_rate,
        tax_amount=draft.tax_amount,
        discount=draft.discount_amount,
        total=draft.total,
        notes=metadata.notes,
        status=status,
        created_at=utc_now(),
    )


def finalize_invoice(
    draft: InvoiceDraft,
    client_id: Optional[str],
    metadata: InvoiceMetadata,
    settings: InvoiceSettings,
) -> Result[Invoice]:
    """
    Validate a draft and build the sent invoice from it

    Items without a description or with a zero amount are dropped. The draft
    and the settings are left untouched; the caller commits the invoice and
    advances the sequence.

    Errors:
        MISSING_CLIENT: No client selected
        NO_VALID_LINE_ITEMS: No item has both a description and an amount > 0
    """
    if not client_id:
        return Return.err(
            Error(
                code="MISSING_CLIENT",
                message="Please select a client",
                reason="An invoice needs a client before it can be finalized",
            )
        )

    billable = [item for item in draft.line_items if item.is_billable()]
    if not billable:
        return Return.err(
            Error(
                code="NO_VALID_LINE_ITEMS",
                message="Please add at least one line item",
                reason="No line item has a description and an amount above zero",
            )
        )

    return Return.ok(
        _build_invoice(draft, client_id, metadata, settings, billable, InvoiceStatus.SENT)
    )


def save_draft(
    draft: InvoiceDraft,
    client_id: Optional[str],
    metadata: InvoiceMetadata,
    settings: InvoiceSettings,
) -> Invoice:
    """Build a draft-status invoice as-is: no validation, no item filtering"""
    return _build_invoice(
        draft, client_id or "", metadata, settings, draft.line_items, InvoiceStatus.DRAFT
    )
