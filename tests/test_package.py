from __future__ import annotations

import pytest
from fastapi import FastAPI

import app
from app.config import Settings


def test_package_resolves_application_lazily() -> None:
    assert isinstance(app.app, FastAPI)
    assert callable(app.create_app)
    assert isinstance(app.settings, Settings)


def test_package_rejects_unknown_attributes() -> None:
    with pytest.raises(AttributeError, match="has no attribute missing"):
        app.missing
