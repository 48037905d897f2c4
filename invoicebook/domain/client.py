"""Client Domain Entity"""

from datetime import datetime
from typing import Annotated

from pydantic import Field

from invoicebook.domain.base import BaseModel, Text, fallback, generate_id, utc_now


class Client(BaseModel):
    """
    Client - Party an invoice is billed to

    Domain Rules:
    - Many invoices may reference one client by id
    - Invoices keep their client_id even if the client disappears;
      such invoices render as "Unknown Client"
    """

    id: Text = Field(default_factory=generate_id)
    name: Text = ""
    email: Text = ""
    phone: Text = ""
    address: Text = ""
    gst: Text = ""
    created_at: Annotated[datetime, fallback(utc_now)] = Field(default_factory=utc_now)
