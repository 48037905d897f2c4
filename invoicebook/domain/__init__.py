from .base import BaseModel, generate_id
from .client import Client
from .draft import InvoiceDraft, InvoiceMetadata, DraftTotals, finalize_invoice, save_draft
from .invoice import Invoice, InvoiceStatus
from .line_item import LineItem
from .settings import Settings, BusinessProfile, PaymentDetails, InvoiceSettings, AppPreferences
from .snapshot import Snapshot

__all__ = [
    "BaseModel",
    "generate_id",
    "Client",
    "InvoiceDraft",
    "InvoiceMetadata",
    "DraftTotals",
    "finalize_invoice",
    "save_draft",
    "Invoice",
    "InvoiceStatus",
    "LineItem",
    "Settings",
    "BusinessProfile",
    "PaymentDetails",
    "InvoiceSettings",
    "AppPreferences",
    "Snapshot",
]
