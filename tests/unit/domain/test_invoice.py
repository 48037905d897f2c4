"""Unit tests for Invoice domain entity"""

import pytest
from datetime import date
from decimal import Decimal
from invoicebook.domain.invoice import Invoice, InvoiceStatus


class TestInvoiceParsing:
    """Invoices read from stored camelCase documents"""

    def test_reads_stored_document(self):
        invoice = Invoice.model_validate(
            {
                "id": "1735689600123",
                "number": "INV-0001",
                "clientId": "1735689600000",
                "date": "2025-01-01",
                "dueDate": "2025-01-31",
                "lineItems": [
                    {"id": "1", "description": "Design", "quantity": 2, "rate": 100.005, "amount": 200.01}
                ],
                "subtotal": 200.01,
                "taxRate": 18,
                "taxAmount": 36,
                "discount": 0,
                "total": 236.01,
                "notes": None,
                "status": "paid",
                "createdAt": "2025-01-01T10:00:00Z",
            }
        )

        assert invoice.client_id == "1735689600000"
        assert invoice.issue_date == date(2025, 1, 1)
        assert invoice.line_items[0].rate == Decimal("100.005")
        assert invoice.total == Decimal("236.01")
        assert invoice.tax_amount == Decimal("36.00")
        assert invoice.notes == ""
        assert invoice.status == InvoiceStatus.PAID

    def test_blank_dates_and_bad_items_are_tolerated(self):
        invoice = Invoice.model_validate({"date": "", "dueDate": None, "lineItems": "oops", "total": "abc"})

        assert invoice.issue_date is None
        assert invoice.due_date is None
        assert invoice.line_items == []
        assert invoice.total == Decimal("0.00")

    def test_serializes_with_camel_case_keys(self):
        document = Invoice(number="INV-0001", issue_date=date(2025, 2, 1)).to_document()

        assert document["date"] == "2025-02-01"
        assert "clientId" in document
        assert "lineItems" in document
        assert "taxAmount" in document


class TestStatusTransitions:

    @pytest.mark.parametrize(
        "current, target",
        [
            (InvoiceStatus.DRAFT, InvoiceStatus.SENT),
            (InvoiceStatus.SENT, InvoiceStatus.PAID),
            (InvoiceStatus.SENT, InvoiceStatus.PENDING),
            (InvoiceStatus.PENDING, InvoiceStatus.PAID),
            (InvoiceStatus.PENDING, InvoiceStatus.SENT),
            (InvoiceStatus.PAID, InvoiceStatus.PAID),
        ],
    )
    def test_allowed(self, current, target):
        assert Invoice(status=current).can_transition_to(target)

    @pytest.mark.parametrize(
        "current, target",
        [
            (InvoiceStatus.PAID, InvoiceStatus.SENT),
            (InvoiceStatus.PAID, InvoiceStatus.DRAFT),
            (InvoiceStatus.SENT, InvoiceStatus.DRAFT),
            (InvoiceStatus.DRAFT, InvoiceStatus.PAID),
        ],
    )
    def test_rejected(self, current, target):
        assert not Invoice(status=current).can_transition_to(target)
