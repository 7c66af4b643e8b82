"""
ui.py – Main application window.

This module contains AppWindow, which is the top-level class that owns the
pywebview window and wires all subsystems together.

Responsibilities:
  - Create AppConfig, FileStorage and DesktopApi in the correct dependency
    order.
  - Create the native window, loading either the development server
    (NODE_ENV=development) or the bundled dist/index.html.
  - Attach the window to the API so folder dialogs have a parent.
  - Re-install the window.desktopAPI bridge after every page load.
"""

import logging
from typing import Optional

import webview

from api import DesktopApi, bridge_script
from config import APP_NAME, DEFAULT_CONFIG, AppConfig
from storage import FileStorage

logger = logging.getLogger(APP_NAME)


class AppWindow:
    """
    The main application window.

    Instantiation:
      1. Creates all subsystem objects (AppConfig → FileStorage → DesktopApi).
      2. Creates the pywebview window pointing at the start URL.
      3. Hooks the bridge injection on the window's 'loaded' event.

    Call run() to enter the GUI event loop.  The loop (and the process) ends
    when the window is closed.
    """

    def __init__(self, config: Optional[AppConfig] = None) -> None:
        # ----------------------------------------------------------------
        # 1. Create subsystems in dependency order.
        # ----------------------------------------------------------------
        self.config  = config or AppConfig()
        self.storage = FileStorage()
        self.api     = DesktopApi(self.storage)

        # ----------------------------------------------------------------
        # 2. Create the native window.
        # ----------------------------------------------------------------
        self.url = self.config.start_url()
        self.window = webview.create_window(
            self.config.get("window_title", DEFAULT_CONFIG["window_title"]),
            url=self.url,
            js_api=self.api,
            width=int(self.config.get("window_width", DEFAULT_CONFIG["window_width"])),
            height=int(self.config.get("window_height", DEFAULT_CONFIG["window_height"])),
            resizable=True,
            text_select=True,
        )
        self.api._attach(self.window)

        # ----------------------------------------------------------------
        # 3. Install the front-end bridge on every page load.
        # ----------------------------------------------------------------
        self.window.events.loaded += self._on_loaded

        logger.info("Window created; loading %s", self.url)

    def _on_loaded(self, *_args) -> None:
        """Inject window.desktopAPI into the freshly loaded page."""
        try:
            self.window.evaluate_js(bridge_script())
        except Exception:
            logger.exception("Failed to install the desktop bridge")

    def run(self) -> None:
        """Start the GUI loop; developer tools open in development mode."""
        logger.info("Starting GUI loop (debug=%s)", self.config.dev_mode)
        webview.start(debug=self.config.dev_mode)
        logger.info("GUI loop finished")
