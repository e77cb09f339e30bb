"""FastAPI REST API for parametric pricing.

This module provides a REST API for quoting prices, checking formulas,
validating module placements and kitchen spaces.

Usage:
    uvicorn parametrics.web:app --reload
"""

from parametrics.web.app import app, create_app

__all__ = ["app", "create_app"]
