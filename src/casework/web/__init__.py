"""FastAPI REST API for module and project estimation.

Usage:
    uvicorn casework.web:app --reload
"""

from casework.web.app import app, create_app

__all__ = ["app", "create_app"]
