"""Invoicing use cases"""
from .load_workspace import LoadWorkspace
from .commit_invoice import FinalizeInvoice, SaveDraftInvoice
from .update_invoice_status import UpdateInvoiceStatus
from .create_client import CreateClient
from .update_settings import UpdateSettings
from .get_dashboard import GetDashboard
from .render_invoice import RenderInvoiceDocument, RenderInvoicePdf
from .export_data import ExportData
from .list_invoices import ListInvoices, GetInvoice
from .manage_draft import (
    StartDraft,
    GetDraft,
    AddDraftItem,
    UpdateDraftItem,
    RemoveDraftItem,
    ApplyDraftAdjustments,
    DiscardDraft,
)
from .dtos import (
    CommitInvoiceCommandDTO,
    InvoiceLineDTO,
    InvoiceResponseDTO,
    UpdateInvoiceStatusCommandDTO,
    InvoiceSummaryDTO,
    DashboardResponseDTO,
    CreateClientCommandDTO,
    ClientResponseDTO,
    InvoiceDefaultsDTO,
    UpdateSettingsCommandDTO,
    SettingsResponseDTO,
    DocumentResponseDTO,
    InvoicePdfResponseDTO,
    ExportDataResponseDTO,
    DraftResponseDTO,
    UpdateDraftItemCommandDTO,
    DraftAdjustmentsCommandDTO,
)

__all__ = [
    "LoadWorkspace",
    "FinalizeInvoice",
    "SaveDraftInvoice",
    "UpdateInvoiceStatus",
    "CreateClient",
    "UpdateSettings",
    "GetDashboard",
    "RenderInvoiceDocument",
    "RenderInvoicePdf",
    "ExportData",
    "ListInvoices",
    "GetInvoice",
    "StartDraft",
    "GetDraft",
    "AddDraftItem",
    "UpdateDraftItem",
    "RemoveDraftItem",
    "ApplyDraftAdjustments",
    "DiscardDraft",
    "CommitInvoiceCommandDTO",
    "InvoiceLineDTO",
    "InvoiceResponseDTO",
    "UpdateInvoiceStatusCommandDTO",
    "InvoiceSummaryDTO",
    "DashboardResponseDTO",
    "CreateClientCommandDTO",
    "ClientResponseDTO",
    "InvoiceDefaultsDTO",
    "UpdateSettingsCommandDTO",
    "SettingsResponseDTO",
    "DocumentResponseDTO",
    "InvoicePdfResponseDTO",
    "ExportDataResponseDTO",
    "DraftResponseDTO",
    "UpdateDraftItemCommandDTO",
    "DraftAdjustmentsCommandDTO",
]
