"""
Store module for the quote service.
Holds the in-memory quote collection and its id counter.
"""

from .models import Quote, SEED_QUOTES
from .quote_store import QuoteStore, create_default_store

__all__ = ['Quote', 'SEED_QUOTES', 'QuoteStore', 'create_default_store']
