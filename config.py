"""
config.py – Application configuration and constants.

This module defines AppConfig, a central container for:
  - All application-wide constants (window defaults, dev-server URL, …)
  - The user configuration (window size, dev-server URL, bundle location)
    stored as a JSON file on disk and exposed through a simple dict-like
    interface.
  - Helper utilities shared across modules: OS-appropriate data-directory
    resolution, PyInstaller-aware resource-path resolution, development-mode
    detection and logger setup.

No other application module is imported here, so config.py sits at the bottom
of the dependency graph and can be safely imported by any other module.
"""

import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

import appdirs

# ---------------------------------------------------------------------------
# Application-level constants – these never change at runtime.
# ---------------------------------------------------------------------------

APP_NAME = "DesktopSaver"

APP_VERSION = "1.0.0"

# Environment variable that switches the window to the development server.
MODE_ENV_VAR = "NODE_ENV"
DEV_MODE_VALUE = "development"

# ---------------------------------------------------------------------------
# Default values written to config.json on first run.
# ---------------------------------------------------------------------------
DEFAULT_CONFIG: dict = {
    "window_title": "Desktop Saver",
    "window_width": 1200,
    "window_height": 800,
    # Vite dev server used when NODE_ENV=development.
    "dev_server_url": "http://localhost:5173",
    # Production bundle, relative to the application resource directory.
    "dist_index": os.path.join("dist", "index.html"),
}

LOG_FORMAT = "%(asctime)s %(levelname)s: %(message)s"


def is_dev_mode(environ=None) -> bool:
    """Return True when the process was started in development mode."""
    env = os.environ if environ is None else environ
    return env.get(MODE_ENV_VAR) == DEV_MODE_VALUE


class AppConfig:
    """
    Manages application configuration, file paths and logging.

    On instantiation the class:
      1. Resolves the OS-appropriate user-data directory.
      2. Derives the config and log paths from that directory.
      3. Sets up a rotating log handler.
      4. Loads (or creates) the JSON configuration file.

    Parameters
    ----------
    user_data_dir : str, optional
        Overrides the appdirs location (tests point this at a temp dir).
    environ : mapping, optional
        Environment used for mode detection; defaults to os.environ.

    Attributes
    ----------
    user_data_dir : str
        Absolute path of the directory that stores all persistent data.
    config_path : str
        JSON configuration file.
    log_path : str
        Rotating application log.
    dev_mode : bool
        True when NODE_ENV=development.
    data : dict
        The currently loaded configuration values (mutable at runtime).
    logger : logging.Logger
        Shared Python logger for the whole application.
    """

    def __init__(self, user_data_dir: Optional[str] = None, environ=None) -> None:
        # --- Resolve (and create) the persistent data directory ---
        self.user_data_dir: str = self._get_user_data_dir(user_data_dir)

        self.config_path: str = os.path.join(self.user_data_dir, "config.json")
        self.log_path:    str = os.path.join(self.user_data_dir, "app.log")

        self.dev_mode: bool = is_dev_mode(environ)

        # --- Configure the rotating log handler ---
        self.logger: logging.Logger = self._setup_logger()

        # --- Load or create the JSON configuration ---
        self.data: dict = self._load()

        self.logger.info(
            "AppConfig initialised; data dir: %s, mode: %s",
            self.user_data_dir,
            "development" if self.dev_mode else "production",
        )

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _get_user_data_dir(override: Optional[str] = None) -> str:
        """
        Return (and create if necessary) the OS-appropriate user-data
        directory, e.g. ~/.local/share/DesktopSaver on Linux.
        """
        path = override or appdirs.user_data_dir(APP_NAME)
        os.makedirs(path, exist_ok=True)
        return path

    def _setup_logger(self) -> logging.Logger:
        """
        Create and configure a rotating file logger for the whole application.

        The log rotates at 2 MB and keeps up to 3 backup files.  In
        development mode records are mirrored to stderr as well.
        A logger that already points at this log file is left alone.
        """
        logger = logging.getLogger(APP_NAME)
        logger.setLevel(logging.DEBUG)

        log_file = os.path.abspath(self.log_path)
        has_file_handler = any(
            isinstance(h, RotatingFileHandler) and h.baseFilename == log_file
            for h in logger.handlers
        )
        if not has_file_handler:
            handler = RotatingFileHandler(
                self.log_path,
                maxBytes=2_000_000,
                backupCount=3,
                encoding="utf-8",
            )
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            logger.addHandler(handler)

        if self.dev_mode and not any(
            type(h) is logging.StreamHandler for h in logger.handlers
        ):
            console = logging.StreamHandler(sys.stderr)
            console.setFormatter(logging.Formatter(LOG_FORMAT))
            logger.addHandler(console)

        return logger

    def _load(self) -> dict:
        """
        Read config.json from disk.

        Missing keys are back-filled from DEFAULT_CONFIG so that new
        settings introduced in later versions are always present.

        Returns the loaded (or default) configuration dictionary.
        """
        try:
            if os.path.exists(self.config_path):
                with open(self.config_path, "r", encoding="utf-8") as fh:
                    cfg = json.load(fh)
                if not isinstance(cfg, dict):
                    raise ValueError("config.json does not contain an object")
                for key, value in DEFAULT_CONFIG.items():
                    cfg.setdefault(key, value)
                return cfg
        except Exception:
            self.logger.exception("Failed to load config; using defaults")

        return dict(DEFAULT_CONFIG)

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    def save(self) -> None:
        """Persist the current configuration dictionary to disk as JSON."""
        try:
            with open(self.config_path, "w", encoding="utf-8") as fh:
                json.dump(self.data, fh, indent=2)
            self.logger.info("Config saved")
        except Exception:
            self.logger.exception("Failed to save config")

    def get(self, key: str, default=None):
        """Return a configuration value by key, or *default* if not found."""
        return self.data.get(key, default)

    def set(self, key: str, value) -> None:
        """
        Update a configuration value in memory.

        Call save() afterwards to persist the change to disk.
        """
        self.data[key] = value

    def start_url(self) -> str:
        """
        Return what the main window should load: the dev-server URL in
        development mode, otherwise the bundled index.html.
        """
        if self.dev_mode:
            return self.get("dev_server_url", DEFAULT_CONFIG["dev_server_url"])
        return self.resource_path(self.get("dist_index", DEFAULT_CONFIG["dist_index"]))

    @staticmethod
    def resource_path(rel_path: str) -> str:
        """
        Resolve *rel_path* to an absolute path that works both in the
        normal development environment and inside a PyInstaller bundle.

        PyInstaller extracts bundled resources to a temporary directory
        stored in sys._MEIPASS at runtime.
        """
        try:
            base = sys._MEIPASS  # type: ignore[attr-defined]  # set by PyInstaller
        except AttributeError:
            base = os.path.dirname(os.path.abspath(__file__))
        return os.path.join(base, rel_path)
