"""Cinepage: server-rendered movie catalog pages.

Importing this package exposes the FastAPI application defined in
:mod:`app.main`, so ``uvicorn cinepage:app`` works alongside
``python -m cinepage``.
"""

from __future__ import annotations

from app.main import app, create_app

__version__ = "1.0.0"

__all__ = ["app", "create_app", "__version__"]
