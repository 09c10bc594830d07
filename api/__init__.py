"""
API module for the quote service.
Provides the FastAPI-based REST API over the in-memory quote store.
"""

__all__ = ['app', 'routes', 'models', 'middleware']
