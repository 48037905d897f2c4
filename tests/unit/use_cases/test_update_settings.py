"""Unit tests for UpdateSettings use case"""

import pytest
from decimal import Decimal

from invoicebook.app.use_cases.invoicing.dtos import InvoiceDefaultsDTO, UpdateSettingsCommandDTO
from invoicebook.app.use_cases.invoicing.update_settings import UpdateSettings
from invoicebook.app.workspace import Workspace
from invoicebook.domain.invoice import Invoice
from invoicebook.domain.settings import BusinessProfile, PaymentDetails


@pytest.fixture
def workspace():
    workspace = Workspace()
    workspace.settings.invoice.next_number = 8
    return workspace


@pytest.fixture
def update_settings_use_case(workspace, mock_uow, mock_snapshot_repo):
    return UpdateSettings(workspace=workspace, uow=mock_uow, snapshot_repo=mock_snapshot_repo)


@pytest.mark.asyncio
class TestUpdateSettings:

    async def test_replaces_profile_and_payment(self, update_settings_use_case, workspace):
        command = UpdateSettingsCommandDTO(
            profile=BusinessProfile(name="Sharma Design", email="hi@sharma.example"),
            payment=PaymentDetails(upi="sharma@okbank"),
            dark_mode=True,
        )

        result = await update_settings_use_case.execute(command)

        assert result.is_ok()
        assert workspace.settings.profile.name == "Sharma Design"
        assert workspace.settings.payment.upi == "sharma@okbank"
        assert workspace.settings.app.dark_mode is True

    async def test_merges_invoice_defaults_and_keeps_sequence(self, update_settings_use_case, workspace):
        command = UpdateSettingsCommandDTO(invoice=InvoiceDefaultsDTO(tax_rate=Decimal("5"), prefix="ACME-"))

        await update_settings_use_case.execute(command)

        invoice_settings = workspace.settings.invoice
        assert invoice_settings.tax_rate == Decimal("5")
        assert invoice_settings.prefix == "ACME-"
        assert invoice_settings.currency == "₹"
        assert invoice_settings.payment_terms == 30
        assert invoice_settings.next_number == 8
        assert workspace.preview_number() == "ACME-0008"

    async def test_existing_invoices_keep_their_tax_rate(self, update_settings_use_case, workspace):
        workspace.snapshot.invoices.append(Invoice(tax_rate="18", tax_amount="18", total="118"))

        await update_settings_use_case.execute(
            UpdateSettingsCommandDTO(invoice=InvoiceDefaultsDTO(tax_rate=Decimal("28")))
        )

        assert workspace.invoices[0].tax_rate == Decimal("18")
        assert workspace.invoices[0].total == Decimal("118.00")

    async def test_omitted_sections_unchanged(self, update_settings_use_case, workspace, mock_snapshot_repo):
        workspace.settings.profile.name = "Keep me"

        result = await update_settings_use_case.execute(UpdateSettingsCommandDTO())

        assert result.value.settings.profile.name == "Keep me"
        mock_snapshot_repo.save.assert_awaited_once()

    async def test_unreadable_numeric_defaults_are_coerced(self, update_settings_use_case, workspace):
        """
        Given: tax rate and payment terms typed as free text
        When: settings are saved
        Then: they are read leniently instead of being rejected
        """
        command = UpdateSettingsCommandDTO(invoice=InvoiceDefaultsDTO(tax_rate="abc", payment_terms="45 days"))

        result = await update_settings_use_case.execute(command)

        assert result.is_ok()
        assert workspace.settings.invoice.tax_rate == Decimal("0")
        assert workspace.settings.invoice.payment_terms == 45
