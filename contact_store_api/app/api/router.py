"""
Top‑level API router.

Aggregates the domain routers under a unified prefix.  When new
domains are introduced, include their routers here.
"""

from fastapi import APIRouter

from .endpoints import contacts

router = APIRouter()

router.include_router(contacts.router, prefix="/contacts", tags=["contacts"])
