"""
Pydantic schemas for contacts.

Request bodies declare every field as optional: missing or blank
values are reported by ``services.validation`` together with any
other field errors, instead of being rejected one at a time by
pydantic.  Partial updates accept an arbitrary JSON object and are
filtered by the service, so they have no schema of their own.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class ContactIn(BaseModel):
    """Body for creating or fully replacing a contact."""

    name: Optional[str] = Field(None, examples=["John Doe"])
    email: Optional[str] = Field(None, examples=["john.doe@example.com"])
    phone: Optional[str] = Field(None, examples=["+1234567890"])


class ContactRead(BaseModel):
    """Schema for reading a contact."""

    id: int
    name: str
    email: str
    phone: str
    created_at: str
    updated_at: str

    model_config = {
        "from_attributes": True,
    }


class Pagination(BaseModel):
    total: int
    page: int
    limit: int
    total_pages: int = Field(..., alias="totalPages")

    model_config = {
        "populate_by_name": True,
    }


class ContactList(BaseModel):
    """One page of contacts plus pagination metadata."""

    data: List[ContactRead]
    pagination: Pagination


class ContactDeleted(BaseModel):
    message: str = "Contact deleted successfully"
    id: int
