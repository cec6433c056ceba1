"""
API package containing the HTTP routes.

``router.py`` aggregates the domain routers from ``endpoints`` and
is mounted under ``/api`` by the application factory.
"""
