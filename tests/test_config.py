"""Unit tests for AppConfig: defaults, persistence and mode switching."""

from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path

from config import APP_NAME, DEFAULT_CONFIG, AppConfig, is_dev_mode


def test_defaults_when_no_config_file(app_config: AppConfig) -> None:
    assert app_config.data == DEFAULT_CONFIG
    assert app_config.get("window_width") == 1200
    assert app_config.get("window_height") == 800
    assert app_config.get("missing", "fallback") == "fallback"


def test_user_data_dir_is_created(tmp_path: Path) -> None:
    target = tmp_path / "nested" / "dir"
    cfg = AppConfig(user_data_dir=str(target), environ={})
    assert target.is_dir()
    assert cfg.config_path == os.path.join(str(target), "config.json")


def test_existing_config_is_back_filled(tmp_path: Path) -> None:
    (tmp_path / "config.json").write_text(json.dumps({"window_width": 640}), encoding="utf-8")
    cfg = AppConfig(user_data_dir=str(tmp_path), environ={})
    assert cfg.get("window_width") == 640
    assert cfg.get("window_height") == DEFAULT_CONFIG["window_height"]
    assert cfg.get("dev_server_url") == DEFAULT_CONFIG["dev_server_url"]


def test_corrupt_config_falls_back_to_defaults(tmp_path: Path) -> None:
    (tmp_path / "config.json").write_text("{not json", encoding="utf-8")
    cfg = AppConfig(user_data_dir=str(tmp_path), environ={})
    assert cfg.data == DEFAULT_CONFIG


def test_save_then_reload(tmp_path: Path) -> None:
    cfg = AppConfig(user_data_dir=str(tmp_path), environ={})
    cfg.set("window_title", "Exporter")
    cfg.save()

    reloaded = AppConfig(user_data_dir=str(tmp_path), environ={})
    assert reloaded.get("window_title") == "Exporter"


def test_is_dev_mode() -> None:
    assert is_dev_mode({"NODE_ENV": "development"}) is True
    assert is_dev_mode({"NODE_ENV": "production"}) is False
    assert is_dev_mode({}) is False


def test_start_url_in_development(tmp_path: Path) -> None:
    cfg = AppConfig(user_data_dir=str(tmp_path), environ={"NODE_ENV": "development"})
    assert cfg.dev_mode is True
    assert cfg.start_url() == "http://localhost:5173"


def test_start_url_in_production_points_at_bundle(app_config: AppConfig) -> None:
    url = app_config.start_url()
    assert os.path.isabs(url)
    assert url.endswith(os.path.join("dist", "index.html"))


def test_resource_path_inside_pyinstaller_bundle(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setattr(sys, "_MEIPASS", str(tmp_path), raising=False)
    assert AppConfig.resource_path("dist/index.html") == os.path.join(str(tmp_path), "dist/index.html")


def test_logger_writes_to_log_file(app_config: AppConfig) -> None:
    logger = logging.getLogger(APP_NAME)
    logger.info("hello from test")
    for handler in logger.handlers:
        handler.flush()
    assert "hello from test" in Path(app_config.log_path).read_text(encoding="utf-8")


def test_logger_handlers_not_duplicated(tmp_path: Path) -> None:
    AppConfig(user_data_dir=str(tmp_path), environ={"NODE_ENV": "development"})
    AppConfig(user_data_dir=str(tmp_path), environ={"NODE_ENV": "development"})
    handlers = logging.getLogger(APP_NAME).handlers
    assert len(handlers) == 2
