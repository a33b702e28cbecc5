"""
API Routes Package

Contains all route modules for the invoice import API.
"""

from .invoices import router as invoices_router

__all__ = [
    "invoices_router",
]
