"""Integration tests for ReportLabPdfService"""

import pytest
from datetime import date

from invoicebook.adapter.services.pdf_service import ReportLabPdfService
from invoicebook.domain.client import Client
from invoicebook.domain.document import project
from invoicebook.domain.invoice import Invoice, InvoiceStatus
from invoicebook.domain.line_item import LineItem
from invoicebook.domain.settings import BusinessProfile, PaymentDetails, Settings


@pytest.fixture
def invoice():
    return Invoice(
        number="INV-0042",
        client_id="c1",
        issue_date=date(2025, 1, 5),
        due_date=date(2025, 2, 4),
        line_items=[
            LineItem(description="Design <draft> & review", quantity="2", rate="100.005", amount="200.01"),
            LineItem(description="Hosting", quantity="1", rate="50", amount="50"),
        ],
        subtotal="250.01",
        tax_rate="18",
        tax_amount="45.00",
        discount="10",
        total="285.01",
        notes="Thank you",
        status=InvoiceStatus.SENT,
    )


@pytest.fixture
def settings():
    return Settings(
        profile=BusinessProfile(name="Sharma Design", address="MG Road", gst="29ABC"),
        payment=PaymentDetails(upi="sharma@okbank", bank="HDFC", account="1234", ifsc="HDFC0001"),
    )


class TestReportLabPdfService:

    @pytest.mark.parametrize("compact", [False, True])
    def test_renders_pdf(self, invoice, settings, compact):
        document = project(invoice, Client(id="c1", name="Acme", gst="27XYZ"), settings, compact=compact)

        pdf_bytes = ReportLabPdfService().render_document(document)

        assert pdf_bytes.startswith(b"%PDF")
        assert len(pdf_bytes) > 1000

    def test_renders_minimal_document(self, settings):
        document = project(Invoice(number="INV-0001"), None, Settings())

        pdf_bytes = ReportLabPdfService().render_document(document)

        assert pdf_bytes.startswith(b"%PDF")
