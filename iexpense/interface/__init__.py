"""Mini README: Interactive interfaces for iExpense.

Exports the FastAPI application factory serving the JSON API consumed by
the presentation layer.
"""

from .web_app import create_application

__all__ = ["create_application"]
