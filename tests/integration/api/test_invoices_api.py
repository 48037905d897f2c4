"""Integration tests for Invoice API endpoints"""

import json
import pytest
from decimal import Decimal
from httpx import AsyncClient

from invoicebook.adapter.repositories.snapshot_repository import SqlAlchemySnapshotRepository
from invoicebook.domain.client import Client

API = "/api"


async def _compose_invoice(client: AsyncClient):
    """Start a draft with items 2 x 100.005 and 1 x 50 at 18% tax"""
    draft = (await client.post(f"{API}/invoices/draft")).json()
    first_id = draft["line_items"][0]["id"]
    await client.patch(f"{API}/invoices/draft/items/{first_id}", json={"field": "description", "value": "Design"})
    await client.patch(f"{API}/invoices/draft/items/{first_id}", json={"field": "quantity", "value": "2"})
    await client.patch(f"{API}/invoices/draft/items/{first_id}", json={"field": "rate", "value": "100.005"})

    draft = (await client.post(f"{API}/invoices/draft/items")).json()
    second_id = draft["line_items"][1]["id"]
    await client.patch(f"{API}/invoices/draft/items/{second_id}", json={"field": "description", "value": "Hosting"})
    response = await client.patch(f"{API}/invoices/draft/items/{second_id}", json={"field": "rate", "value": 50})
    return response.json()


class TestDraftAPIIntegration:

    @pytest.mark.asyncio
    async def test_draft_totals(self, client: AsyncClient):
        # Act
        draft = await _compose_invoice(client)

        # Assert
        assert draft["invoice_number"] == "INV-0001"
        totals = draft["totals"]
        assert Decimal(totals["subtotal"]) == Decimal("250.01")
        assert Decimal(totals["tax_amount"]) == Decimal("45.00")
        assert Decimal(totals["discount_amount"]) == Decimal("0.00")
        assert Decimal(totals["total"]) == Decimal("295.01")

    @pytest.mark.asyncio
    async def test_adjustments(self, client: AsyncClient):
        await _compose_invoice(client)

        response = await client.put(f"{API}/invoices/draft/adjustments", json={"tax_rate": "0", "discount": "0.01"})

        assert response.status_code == 200
        assert Decimal(response.json()["totals"]["total"]) == Decimal("250.00")

    @pytest.mark.asyncio
    async def test_response_keys_are_snake_case(self, client: AsyncClient):
        draft = (await client.post(f"{API}/invoices/draft")).json()
        settings = (await client.get(f"{API}/settings")).json()

        assert set(draft["totals"]) == {"subtotal", "tax_rate", "tax_amount", "discount_amount", "total"}
        assert set(settings["invoice"]) == {"currency", "tax_rate", "prefix", "payment_terms", "next_number"}
        assert settings["app"] == {"dark_mode": False}

    @pytest.mark.asyncio
    async def test_no_draft_returns_404(self, client: AsyncClient):
        response = await client.get(f"{API}/invoices/draft")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NO_ACTIVE_DRAFT"

    @pytest.mark.asyncio
    async def test_invalid_item_field_rejected(self, client: AsyncClient):
        draft = (await client.post(f"{API}/invoices/draft")).json()
        item_id = draft["line_items"][0]["id"]

        response = await client.patch(f"{API}/invoices/draft/items/{item_id}", json={"field": "amount", "value": 1})

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_discard_draft(self, client: AsyncClient, workspace):
        await client.post(f"{API}/invoices/draft")

        response = await client.delete(f"{API}/invoices/draft")

        assert response.status_code == 204
        assert workspace.draft is None


class TestFinalizeAPIIntegration:

    @pytest.mark.asyncio
    async def test_finalize_persists_snapshot(self, client: AsyncClient, workspace, db_session):
        # Arrange
        workspace.add_client(Client(id="c1", name="Acme"))
        await _compose_invoice(client)

        # Act
        response = await client.post(f"{API}/invoices/draft/finalize", json={"client_id": "c1"})

        # Assert
        assert response.status_code == 201
        data = response.json()
        assert data["number"] == "INV-0001"
        assert data["status"] == "sent"
        assert data["client_name"] == "Acme"
        assert Decimal(data["total"]) == Decimal("295.01")
        assert data["persisted"] is True

        stored = await SqlAlchemySnapshotRepository(db_session).load()
        assert len(stored.invoices) == 1
        assert stored.settings.invoice.next_number == 2

    @pytest.mark.asyncio
    async def test_finalize_without_client(self, client: AsyncClient, workspace):
        await _compose_invoice(client)

        response = await client.post(f"{API}/invoices/draft/finalize", json={})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "MISSING_CLIENT"
        assert workspace.settings.invoice.next_number == 1
        assert workspace.draft is not None

    @pytest.mark.asyncio
    async def test_save_as_draft(self, client: AsyncClient):
        await client.post(f"{API}/invoices/draft")

        response = await client.post(f"{API}/invoices/draft/save", json={})

        assert response.status_code == 201
        assert response.json()["status"] == "draft"


class TestInvoiceAPIIntegration:

    @pytest.mark.asyncio
    async def test_list_get_and_mark_paid(self, client: AsyncClient, workspace):
        # Arrange
        workspace.add_client(Client(id="c1", name="Acme"))
        await _compose_invoice(client)
        created = (await client.post(f"{API}/invoices/draft/finalize", json={"client_id": "c1"})).json()
        invoice_id = created["invoice_id"]

        # Act
        listed = await client.get(f"{API}/invoices")
        fetched = await client.get(f"{API}/invoices/{invoice_id}")
        paid = await client.patch(f"{API}/invoices/{invoice_id}/status", json={"status": "paid"})
        reopened = await client.patch(f"{API}/invoices/{invoice_id}/status", json={"status": "sent"})

        # Assert
        assert [row["number"] for row in listed.json()] == ["INV-0001"]
        assert listed.json()[0]["total_display"] == "₹295.01"
        assert fetched.json()["client_id"] == "c1"
        assert paid.status_code == 200
        assert paid.json()["status"] == "paid"
        assert reopened.status_code == 400
        assert reopened.json()["error"]["code"] == "INVALID_STATUS_TRANSITION"

    @pytest.mark.asyncio
    async def test_invoice_not_found(self, client: AsyncClient):
        response = await client.get(f"{API}/invoices/missing")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "INVOICE_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_document_and_pdf(self, client: AsyncClient, workspace):
        workspace.add_client(Client(id="c1", name="Acme", gst="27XYZ"))
        await _compose_invoice(client)
        created = (await client.post(f"{API}/invoices/draft/finalize", json={"client_id": "c1"})).json()
        invoice_id = created["invoice_id"]

        full = await client.get(f"{API}/invoices/{invoice_id}/document")
        compact = await client.get(f"{API}/invoices/{invoice_id}/document", params={"compact": "true"})
        pdf = await client.get(f"{API}/invoices/{invoice_id}/pdf")

        assert full.status_code == 200
        recipient = full.json()["document"]["recipient"]
        assert recipient["name"] == "Acme"
        assert [line["label"] for line in recipient["lines"]] == ["GST"]
        assert compact.json()["document"]["recipient"]["lines"] == []
        assert pdf.status_code == 200
        assert pdf.headers["content-type"] == "application/pdf"
        assert pdf.content.startswith(b"%PDF")
        assert "invoice_" in pdf.headers["content-disposition"]


class TestClientsDashboardSettingsAPI:

    @pytest.mark.asyncio
    async def test_create_and_list_clients(self, client: AsyncClient):
        created = await client.post(f"{API}/clients", json={"name": "Acme", "email": "a@acme.example"})
        listed = await client.get(f"{API}/clients")

        assert created.status_code == 201
        assert created.json()["client"]["name"] == "Acme"
        assert [c["name"] for c in listed.json()] == ["Acme"]
        assert "created_at" in listed.json()[0]

    @pytest.mark.asyncio
    async def test_client_name_required(self, client: AsyncClient):
        response = await client.post(f"{API}/clients", json={"name": ""})

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_dashboard(self, client: AsyncClient, workspace):
        workspace.add_client(Client(id="c1", name="Acme"))
        await _compose_invoice(client)
        created = (await client.post(f"{API}/invoices/draft/finalize", json={"client_id": "c1"})).json()
        await client.patch(f"{API}/invoices/{created['invoice_id']}/status", json={"status": "paid"})

        response = await client.get(f"{API}/dashboard")

        assert response.status_code == 200
        data = response.json()
        assert Decimal(data["stats"]["total_revenue"]) == Decimal("295.01")
        assert data["stats"]["paid_count"] == 1
        assert data["client_count"] == 1
        assert data["recent_invoices"][0]["number"] == "INV-0001"

    @pytest.mark.asyncio
    async def test_update_settings_and_export(self, client: AsyncClient):
        updated = await client.put(
            f"{API}/settings",
            json={"profile": {"name": "Sharma Design"}, "invoice": {"prefix": "SD-", "tax_rate": "12"}},
        )
        fetched = await client.get(f"{API}/settings")
        exported = await client.get(f"{API}/settings/export")

        assert updated.status_code == 200
        assert updated.json()["persisted"] is True
        assert fetched.json()["profile"]["name"] == "Sharma Design"
        assert fetched.json()["invoice"]["prefix"] == "SD-"
        assert Decimal(fetched.json()["invoice"]["tax_rate"]) == Decimal("12")
        assert exported.status_code == 200
        assert "invoice_data_" in exported.headers["content-disposition"]
        assert json.loads(exported.content)["settings"]["profile"]["name"] == "Sharma Design"

    @pytest.mark.asyncio
    async def test_unreadable_settings_numbers_are_coerced(self, client: AsyncClient):
        response = await client.put(
            f"{API}/settings",
            json={"invoice": {"tax_rate": "abc", "payment_terms": "30 days"}},
        )

        assert response.status_code == 200
        invoice_settings = response.json()["settings"]["invoice"]
        assert Decimal(invoice_settings["tax_rate"]) == Decimal("0")
        assert invoice_settings["payment_terms"] == 30
