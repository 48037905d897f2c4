"""Request schemas for Client API"""

from pydantic import BaseModel, Field


class CreateClientRequestSchema(BaseModel):
    """
    Request schema for adding a client

    Used for POST /clients endpoint.
    """

    name: str = Field(..., min_length=1, description="Client name (required, non-empty)")
    email: str = Field(default="", description="Contact email")
    phone: str = Field(default="", description="Contact phone")
    address: str = Field(default="", description="Postal address")
    gst: str = Field(default="", description="GST registration number")

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Acme Traders",
                "email": "accounts@acme.example",
                "phone": "+91 98765 43210",
                "address": "12 MG Road, Bengaluru",
                "gst": "29ABCDE1234F1Z5"
            }
        }
