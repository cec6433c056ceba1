"""
FastAPI dependencies shared by the endpoint modules.

The ``Database`` lives on ``app.state`` (set by ``create_app``); routes
receive a ``ContactService`` bound to it instead of reaching for a
module‑level connection.
"""

from fastapi import Request

from contact_store_api.app.services.contact_service import ContactService


def get_contact_service(request: Request) -> ContactService:
    return ContactService(request.app.state.db)
