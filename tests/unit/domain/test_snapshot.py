"""Unit tests for Snapshot parsing and serialization"""

import json
import pytest
from datetime import date
from decimal import Decimal
from invoicebook.domain.client import Client
from invoicebook.domain.invoice import Invoice, InvoiceStatus
from invoicebook.domain.line_item import LineItem
from invoicebook.domain.snapshot import Snapshot


class TestSnapshotParsing:

    def test_default_snapshot(self):
        snapshot = Snapshot.default()

        assert snapshot.invoices == []
        assert snapshot.clients == []
        assert snapshot.settings.invoice.next_number == 1

    def test_non_list_collections_read_as_empty(self):
        snapshot = Snapshot.from_json(json.dumps({"invoices": {"a": 1}, "clients": "x"}))

        assert snapshot.invoices == []
        assert snapshot.clients == []

    def test_missing_settings_fall_back_to_defaults(self):
        snapshot = Snapshot.from_json(json.dumps({"invoices": [], "clients": [], "settings": None}))

        assert snapshot.settings.invoice.prefix == "INV-"

    def test_non_object_entries_are_skipped(self):
        payload = json.dumps(
            {
                "invoices": [{"number": "INV-0001", "status": "paid"}, 5, "x"],
                "clients": [{"id": "c1", "name": "Acme"}, None],
            }
        )

        snapshot = Snapshot.from_json(payload)

        assert [i.number for i in snapshot.invoices] == ["INV-0001"]
        assert [c.name for c in snapshot.clients] == ["Acme"]

    def test_records_with_unreadable_fields_are_kept(self):
        """
        Given: an invoice with an unknown status and dates that do not parse
        When: the snapshot loads
        Then: the invoice is kept with those fields at their defaults
        """
        payload = json.dumps(
            {
                "invoices": [
                    {"id": "i1", "number": "INV-0001", "status": "paid", "total": "100"},
                    {
                        "id": "i2",
                        "number": "INV-0002",
                        "status": "overdue",
                        "date": "31/02/2025",
                        "dueDate": "soon",
                        "total": "50",
                        "createdAt": "yesterday",
                        "lineItems": [{"description": "Work", "rate": "50"}, "junk"],
                    },
                ],
                "clients": [{"id": "c1", "name": "Acme", "createdAt": 12}],
            }
        )

        snapshot = Snapshot.from_json(payload)

        assert [i.number for i in snapshot.invoices] == ["INV-0001", "INV-0002"]
        kept = snapshot.invoices[1]
        assert kept.status == InvoiceStatus.DRAFT
        assert kept.issue_date is None
        assert kept.due_date is None
        assert kept.total == Decimal("50.00")
        assert [item.description for item in kept.line_items] == ["Work"]
        assert snapshot.clients[0].name == "Acme"

    @pytest.mark.parametrize(
        "invoice_settings",
        [{"nextNumber": None}, {"nextNumber": 0}, {"nextNumber": "abc"}, {"nextNumber": -4}],
    )
    def test_bad_next_number_reads_as_one(self, invoice_settings):
        payload = json.dumps(
            {
                "invoices": [{"number": "INV-0001", "status": "paid"}],
                "clients": [{"id": "c1", "name": "Acme"}],
                "settings": {"invoice": invoice_settings},
            }
        )

        snapshot = Snapshot.from_json(payload)

        assert snapshot.settings.invoice.next_number == 1
        assert len(snapshot.invoices) == 1
        assert len(snapshot.clients) == 1

    def test_settings_resolve_per_section_and_field(self):
        payload = json.dumps(
            {
                "settings": {
                    "profile": None,
                    "payment": {"upi": "shop@okbank"},
                    "invoice": {"prefix": "SD-", "taxRate": "abc", "paymentTerms": "15 days", "nextNumber": "7"},
                    "app": {"darkMode": "sometimes"},
                }
            }
        )

        settings = Snapshot.from_json(payload).settings

        assert settings.profile.name == ""
        assert settings.payment.upi == "shop@okbank"
        assert settings.invoice.prefix == "SD-"
        assert settings.invoice.tax_rate == Decimal("0")
        assert settings.invoice.payment_terms == 15
        assert settings.invoice.next_number == 7
        assert settings.app.dark_mode is False

    @pytest.mark.parametrize("payload", ["not json", "[1, 2]", "null"])
    def test_unreadable_payload_raises(self, payload):
        with pytest.raises(ValueError):
            Snapshot.from_json(payload)


class TestSnapshotSerialization:

    def test_round_trip(self):
        # Arrange
        snapshot = Snapshot.default()
        snapshot.clients.append(Client(id="c1", name="Acme", gst="27XYZ"))
        snapshot.invoices.append(
            Invoice(
                id="i1",
                number="INV-0001",
                client_id="c1",
                issue_date=date(2025, 1, 1),
                line_items=[LineItem(id="l1", description="Work", quantity="1.5", rate="10", amount="15")],
                subtotal="15",
                tax_rate="18",
                tax_amount="2.70",
                total="17.70",
                status=InvoiceStatus.PAID,
            )
        )
        snapshot.settings.invoice.next_number = 2

        # Act
        restored = Snapshot.from_json(snapshot.to_json())

        # Assert
        assert restored.model_dump() == snapshot.model_dump()

    def test_uses_stored_key_layout(self):
        snapshot = Snapshot.default()
        snapshot.invoices.append(Invoice(number="INV-0001", issue_date=date(2025, 1, 1)))

        data = json.loads(snapshot.to_json(indent=2))

        assert set(data) == {"invoices", "clients", "settings"}
        assert data["invoices"][0]["date"] == "2025-01-01"
        assert "nextNumber" in data["settings"]["invoice"]
        assert "darkMode" in data["settings"]["app"]
        assert Decimal(data["invoices"][0]["total"]) == Decimal("0")
