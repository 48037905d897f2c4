"""Dashboard statistics

Pure read-side projections over the invoice collection.
"""

from datetime import date
from decimal import Decimal, ROUND_FLOOR
from typing import Dict, Iterable, List, Sequence

from invoicebook.domain.base import BaseModel
from invoicebook.domain.client import Client
from invoicebook.domain.invoice import Invoice, InvoiceStatus
from invoicebook.domain.money import ZERO, parse_amount

PENDING_STATUSES = (InvoiceStatus.PENDING, InvoiceStatus.SENT)


class DashboardStats(BaseModel):
    total_revenue: Decimal = ZERO
    paid_count: int = 0
    paid_amount: Decimal = ZERO
    pending_count: int = 0
    pending_amount: Decimal = ZERO
    this_month_revenue: Decimal = ZERO
    last_month_revenue: Decimal = ZERO
    revenue_growth_percent: int = 0


class ClientSummary(BaseModel):
    client_id: str
    name: str
    invoice_count: int = 0
    paid_revenue: Decimal = ZERO


def _round_half_up(value: Decimal) -> int:
    # Halves go toward positive infinity: 2.5 -> 3, -2.5 -> -2
    return int((value + Decimal("0.5")).to_integral_value(rounding=ROUND_FLOOR))


def compute_stats(invoices: Iterable[Invoice], reference_date: date) -> DashboardStats:
    """
    Reduce invoices into dashboard metrics

    "This month" and "last month" compare the month of year only, so an
    invoice from the same calendar month of an earlier year counts as this
    month. Draft invoices are excluded from every bucket.

    Args:
        invoices: Invoice collection
        reference_date: Usually today

    Returns:
        DashboardStats
    """
    this_month = reference_date.month
    last_month = 12 if this_month == 1 else this_month - 1

    stats = DashboardStats()

    for invoice in invoices:
        amount = parse_amount(invoice.total)
        invoice_month = invoice.issue_date.month if invoice.issue_date else None

        if invoice.status == InvoiceStatus.PAID:
            stats.total_revenue += amount
            stats.paid_count += 1
            stats.paid_amount += amount

            if invoice_month == this_month:
                stats.this_month_revenue += amount
            elif invoice_month == last_month:
                stats.last_month_revenue += amount
        elif invoice.status in PENDING_STATUSES:
            stats.pending_count += 1
            stats.pending_amount += amount

    if stats.last_month_revenue > 0:
        growth = (
            (stats.this_month_revenue - stats.last_month_revenue)
            / stats.last_month_revenue
            * 100
        )
        stats.revenue_growth_percent = _round_half_up(growth)

    return stats


def summarize_clients(clients: Iterable[Client], invoices: Sequence[Invoice]) -> List[ClientSummary]:
    """Per-client invoice count and paid revenue, in client order"""
    summaries: Dict[str, ClientSummary] = {}
    ordered: List[ClientSummary] = []
    for client in clients:
        summary = ClientSummary(client_id=client.id, name=client.name)
        summaries[client.id] = summary
        ordered.append(summary)

    for invoice in invoices:
        summary = summaries.get(invoice.client_id)
        if summary is None:
            continue
        summary.invoice_count += 1
        if invoice.status == InvoiceStatus.PAID:
            summary.paid_revenue += parse_amount(invoice.total)

    return ordered


def recent_invoices(invoices: Sequence[Invoice], limit: int = 5) -> List[Invoice]:
    """Last ``limit`` invoices in collection order, newest first"""
    if limit <= 0:
        return []
    return list(reversed(list(invoices)[-limit:]))
