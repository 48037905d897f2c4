"""GetDashboard Use Case

Read-only dashboard: stats, recent invoices and per-client totals.
"""

from datetime import date
from typing import Optional
from libs.result import Result, Return
from invoicebook.app.workspace import Workspace
from invoicebook.domain.stats import compute_stats, recent_invoices, summarize_clients
from .dtos import DashboardResponseDTO, InvoiceSummaryDTO


class GetDashboard:
    """
    Use Case: Build the dashboard

    Recomputed on every call; nothing here is stored.
    """

    def __init__(self, workspace: Workspace, recent_limit: int = 5):
        self.workspace = workspace
        self.recent_limit = recent_limit

    async def execute(self, reference_date: Optional[date] = None) -> Result[DashboardResponseDTO]:
        reference_date = reference_date or date.today()
        invoices = self.workspace.invoices
        currency = self.workspace.settings.invoice.currency

        recent = [
            InvoiceSummaryDTO.from_invoice(
                invoice, self.workspace.find_client(invoice.client_id), currency
            )
            for invoice in recent_invoices(invoices, self.recent_limit)
        ]

        return Return.ok(
            DashboardResponseDTO(
                stats=compute_stats(invoices, reference_date),
                client_count=len(self.workspace.clients),
                recent_invoices=recent,
                clients=summarize_clients(self.workspace.clients, invoices),
                reference_date=reference_date,
            )
        )
