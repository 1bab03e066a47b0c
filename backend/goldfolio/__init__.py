# backend/goldfolio/__init__.py
"""Goldfolio portfolio valuation curve engine and API."""
