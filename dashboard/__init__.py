# dashboard/__init__.py
"""
Package entrypoint for the invoices dashboard.

This lets us run:
    uvicorn dashboard:app --reload
"""

from .main import app

__all__ = ["app"]
