"""Snapshot: the full persisted data set

Invoices, clients and settings are always saved and loaded together. Loading
is forgiving: a collection that is not a list reads as empty and an entry that
is not an object is skipped. Inside a record or the settings, each unreadable
field falls back to its default while the rest is kept.
"""

import json
import logging
from typing import List, Optional

from pydantic import Field, ValidationError, field_validator

from invoicebook.domain.base import BaseModel
from invoicebook.domain.client import Client
from invoicebook.domain.invoice import Invoice
from invoicebook.domain.settings import Settings

logger = logging.getLogger(__name__)


def _parse_records(model, raw, kind: str) -> list:
    if not isinstance(raw, list):
        if raw is not None:
            logger.warning(f"Snapshot field '{kind}' is not a list, using an empty list")
        return []

    records = []
    for index, entry in enumerate(raw):
        if isinstance(entry, model):
            records.append(entry)
            continue
        try:
            records.append(model.model_validate(entry))
        except ValidationError as e:
            logger.warning(f"Skipping unreadable {kind} entry at index {index}: {e.error_count()} error(s)")
    return records


class Snapshot(BaseModel):
    invoices: List[Invoice] = Field(default_factory=list)
    clients: List[Client] = Field(default_factory=list)
    settings: Settings = Field(default_factory=Settings)

    @field_validator("invoices", mode="before")
    @classmethod
    def coerce_invoices(cls, v):
        return _parse_records(Invoice, v, "invoices")

    @field_validator("clients", mode="before")
    @classmethod
    def coerce_clients(cls, v):
        return _parse_records(Client, v, "clients")

    @field_validator("settings", mode="before")
    @classmethod
    def coerce_settings(cls, v):
        return v if isinstance(v, (dict, Settings)) else {}

    @classmethod
    def default(cls) -> "Snapshot":
        """Empty collections and default settings"""
        return cls()

    @classmethod
    def from_json(cls, payload: str) -> "Snapshot":
        """
        Parse a stored snapshot

        Raises:
            ValueError: payload is not JSON or not a JSON object
        """
        data = json.loads(payload)
        if not isinstance(data, dict):
            raise ValueError("Snapshot payload must be a JSON object")
        return cls.model_validate(data)

    def to_json(self, indent: Optional[int] = None) -> str:
        return self.model_dump_json(by_alias=True, indent=indent)

    def find_client(self, client_id: str) -> Optional[Client]:
        for client in self.clients:
            if client.id == client_id:
                return client
        return None

    def find_invoice(self, invoice_id: str) -> Optional[Invoice]:
        for invoice in self.invoices:
            if invoice.id == invoice_id:
                return invoice
        return None
