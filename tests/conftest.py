"""Shared fixtures for the test suite."""

from __future__ import annotations

import base64
import logging
from pathlib import Path

import pytest

from config import APP_NAME, AppConfig
from storage import FileStorage


def data_uri(content: bytes, mime: str = "image/png") -> str:
    """Encode *content* the way the front-end does (canvas.toDataURL style)."""
    return f"data:{mime};base64," + base64.b64encode(content).decode("ascii")


@pytest.fixture(autouse=True)
def _reset_app_logger():
    """Drop handlers AppConfig attached so log files in tmp dirs are released."""
    yield
    logger = logging.getLogger(APP_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def storage() -> FileStorage:
    return FileStorage()


@pytest.fixture
def app_config(tmp_path: Path) -> AppConfig:
    return AppConfig(user_data_dir=str(tmp_path / "userdata"), environ={})


@pytest.fixture
def make_data_uri():
    return data_uri
