"""
Contact endpoints.

These routes expose the CRUD API for contacts under ``/api/contacts``.
Handlers only parse the request and delegate to ``ContactService``;
validation failures, missing contacts and database errors are raised
by the service and turned into JSON responses by the handlers in
``core.errors``.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query, status

from contact_store_api.app.api.deps import get_contact_service
from contact_store_api.app.schemas.contact import (
    ContactDeleted,
    ContactIn,
    ContactList,
    ContactRead,
)
from contact_store_api.app.services.contact_service import ContactService

router = APIRouter()

# Keeps (page - 1) * limit within SQLite's 64-bit OFFSET.
MAX_PAGE = 1_000_000_000
MAX_LIMIT = 1000


@router.get("", response_model=ContactList)
async def list_contacts(
    search: Optional[str] = Query(None, description="Substring matched against name, email and phone"),
    sort_by: Optional[str] = Query("name", alias="sortBy"),
    order: Optional[str] = Query("asc"),
    page: int = Query(1, ge=1, le=MAX_PAGE),
    limit: int = Query(10, ge=1, le=MAX_LIMIT),
    service: ContactService = Depends(get_contact_service),
) -> ContactList:
    """Return a page of contacts.

    Unknown ``sortBy`` values fall back to ``name`` and any ``order``
    other than ``desc`` sorts ascending; neither is an error.
    """
    return await service.list_contacts(
        search=search,
        sort_by=sort_by,
        order=order,
        page=page,
        limit=limit,
    )


@router.get("/{contact_id}", response_model=ContactRead)
async def get_contact(
    contact_id: int,
    service: ContactService = Depends(get_contact_service),
) -> ContactRead:
    """Retrieve a single contact by ID; 404 if it does not exist."""
    return await service.get_contact(contact_id)


@router.post("", response_model=ContactRead, status_code=status.HTTP_201_CREATED)
async def create_contact(
    contact_in: ContactIn,
    service: ContactService = Depends(get_contact_service),
) -> ContactRead:
    return await service.create_contact(contact_in.model_dump())


@router.put("/{contact_id}", response_model=ContactRead)
async def replace_contact(
    contact_id: int,
    contact_in: ContactIn,
    service: ContactService = Depends(get_contact_service),
) -> ContactRead:
    """Replace name, email and phone of an existing contact."""
    return await service.replace_contact(contact_id, contact_in.model_dump())


@router.patch("/{contact_id}", response_model=ContactRead)
async def patch_contact(
    contact_id: int,
    updates: Dict[str, Any] = Body(...),
    service: ContactService = Depends(get_contact_service),
) -> ContactRead:
    """Update only the supplied fields.

    Keys other than ``name``, ``email`` and ``phone`` are ignored; a
    body without any of them is rejected with 400.
    """
    return await service.patch_contact(contact_id, updates)


@router.delete("/{contact_id}", response_model=ContactDeleted)
async def delete_contact(
    contact_id: int,
    service: ContactService = Depends(get_contact_service),
) -> ContactDeleted:
    return await service.delete_contact(contact_id)
