"""Pydantic models for records exported from the support platform."""

from typing import List, Optional

from pydantic import BaseModel, Field


class CustomField(BaseModel):
    """One ``{id, value}`` pair attached to a ticket."""

    id: Optional[str] = Field(None, description="Custom field identifier")
    value: Optional[str] = Field(
        None, description="Field value; None only when the value element is absent"
    )


class Ticket(BaseModel):
    """Ticket record with the fields the analysis consumes."""

    brand_id: Optional[str] = Field(None, description="Brand the ticket belongs to")
    attachments: List[str] = Field(default_factory=list, description="Attachment entries")
    cc_users: List[str] = Field(default_factory=list, description="CC'd user entries")
    custom_fields: List[CustomField] = Field(
        default_factory=list, description="Custom field entries in document order"
    )


class User(BaseModel):
    """User record."""

    organization_id: Optional[str] = Field(None, description="Owning organization")


class Organization(BaseModel):
    id: Optional[str] = Field(None, description="Organization identifier")
