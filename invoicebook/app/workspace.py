"""Workspace: the single-user session state

Owns the loaded snapshot and the one invoice draft being composed. Use cases
receive the workspace explicitly; nothing reads ambient global state.
"""

import logging
from datetime import date
from typing import Optional

from invoicebook.domain.client import Client
from invoicebook.domain.draft import InvoiceDraft, InvoiceMetadata, default_metadata
from invoicebook.domain.invoice import Invoice
from invoicebook.domain.snapshot import Snapshot

logger = logging.getLogger(__name__)


class Workspace:
    """
    In-memory state container

    Rules:
    - At most one draft is active; begin_draft replaces any previous one
    - commit appends the invoice, advances the numbering sequence exactly once
      and clears the draft
    - The in-memory snapshot is authoritative; persisting it is the caller's job
    """

    def __init__(self, snapshot: Optional[Snapshot] = None):
        self.snapshot = snapshot or Snapshot.default()
        self.draft: Optional[InvoiceDraft] = None
        self.draft_metadata: Optional[InvoiceMetadata] = None

    @property
    def settings(self):
        return self.snapshot.settings

    @property
    def invoices(self):
        return self.snapshot.invoices

    @property
    def clients(self):
        return self.snapshot.clients

    def begin_draft(self, today: Optional[date] = None) -> InvoiceDraft:
        """
        Start composing a new invoice

        The draft starts with one blank line item and the default tax rate;
        the metadata is dated today and due after the payment terms.
        """
        invoice_settings = self.settings.invoice
        draft = InvoiceDraft()
        draft.recalculate(tax_rate=invoice_settings.tax_rate, discount=0)
        draft.add_item()

        self.draft = draft
        self.draft_metadata = default_metadata(invoice_settings, today)
        logger.debug(f"Began draft for {invoice_settings.next_invoice_number()}")
        return draft

    def discard_draft(self) -> None:
        self.draft = None
        self.draft_metadata = None

    def preview_number(self) -> str:
        return self.settings.invoice.next_invoice_number()

    def commit(self, invoice: Invoice) -> Invoice:
        self.snapshot.invoices.append(invoice)
        self.settings.invoice.advance()
        self.discard_draft()
        logger.info(
            f"Committed invoice {invoice.number} ({invoice.status.value}), "
            f"next number is {self.preview_number()}"
        )
        return invoice

    def add_client(self, client: Client) -> Client:
        self.snapshot.clients.append(client)
        return client

    def find_client(self, client_id: str) -> Optional[Client]:
        return self.snapshot.find_client(client_id)

    def find_invoice(self, invoice_id: str) -> Optional[Invoice]:
        return self.snapshot.find_invoice(invoice_id)
