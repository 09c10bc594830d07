"""
Quote Service Test Suite
========================

This package contains tests for the Quote Service including:
- Unit tests for the store, API and utility modules
- Integration tests for complete request workflows
"""
