"""
main.py – Application entry point.

This file is intentionally minimal.  All logic lives in specialised modules:

  config.py   – AppConfig      : constants, file paths, config I/O, logging,
                                  dev/production start URL
  models.py   – result shapes  : FileEntry, SaveResult, BatchResult
  storage.py  – FileStorage    : data URI decoding, single and batch saves
  api.py      – DesktopApi     : the allow-listed bridge exposed to the page
  ui.py       – AppWindow      : pywebview window and bridge injection

To run the application:
    python main.py                       # loads dist/index.html
    NODE_ENV=development python main.py  # loads the Vite dev server

To build a standalone executable (requires PyInstaller):
    pyinstaller --onefile --windowed --add-data "dist:dist" main.py
"""

from ui import AppWindow


def main() -> None:
    """Create the application window and start the event loop."""
    app = AppWindow()
    app.run()


if __name__ == "__main__":
    main()
