"""
FastAPI Backend for Invoice Import

Provides REST API endpoints for parsing invoices and checking duplicates.
"""

from .main import app

__all__ = ["app"]
