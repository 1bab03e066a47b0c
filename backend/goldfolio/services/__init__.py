# backend/goldfolio/services/__init__.py
"""
Service layer for business logic.

This package contains the service layer which encapsulates business logic
separate from the API (router) layer. Services:
- Have NO knowledge of HTTP (no HTTPException, no status codes)
- Raise domain-specific exceptions
- Receive all data as parameters (nothing is persisted)

Usage:
    from goldfolio.services.curve import PortfolioCurveService
    from goldfolio.services.exceptions import InvalidTimeRangeError

Architecture:
    services/
    ├── __init__.py                  # This file
    ├── exceptions.py                # Domain exceptions
    ├── constants.py                 # Business constants and limits
    └── curve/                       # Portfolio curve engine
"""
