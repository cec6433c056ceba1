"""
Application package initializer.

The project is organised into the same small layers for every
concern: ``core`` (settings, logging, database, errors), ``schemas``
(pydantic payloads), ``services`` (validation and SQL) and ``api``
(FastAPI routers).  Import ``create_app`` to build an application, or
``app`` for the instance configured from the environment.
"""

from .main import app, create_app  # noqa: F401
