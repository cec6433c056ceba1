"""
Pydantic schema definitions for API payloads.

Schemas are separated from the database table so that the API
representation stays decoupled from persistence.
"""
