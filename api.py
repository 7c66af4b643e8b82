"""
api.py – The bridge exposed to the front-end.

DesktopApi is handed to pywebview as ``js_api``.  pywebview publishes every
public method of that object to the page as ``window.pywebview.api.<name>``,
so the public surface of this class *is* the allow-list: the three file
operations plus the platform lookup.  Collaborators live on private
attributes and are never reachable from the page.

bridge_script() returns the JavaScript evaluated in the page after every load.
It installs ``window.desktopAPI`` as a frozen object on a non-writable,
non-configurable property, carrying the same fixed set of names, so the
front-end never has to touch ``pywebview.api`` directly.
"""

import json
import logging
import sys
from typing import Iterable, Optional

import webview

from config import APP_NAME
from models import BatchResult, FileEntry, SaveResult
from storage import FileStorage

logger = logging.getLogger(APP_NAME)

# Operation names reachable from the page, in bridge order.
EXPOSED_OPERATIONS = ("select_folder", "save_file", "save_files", "get_platform")

_BRIDGE_TEMPLATE = """
(function () {
  if (window.desktopAPI) { return; }
  var api = function () { return window.pywebview.api; };
  Object.defineProperty(window, 'desktopAPI', {
    value: Object.freeze({
      platform: %(platform)s,
      selectFolder: function () { return api().select_folder(); },
      saveFile: function (filePath, data) { return api().save_file(filePath, data); },
      saveFiles: function (folderPath, files) { return api().save_files(folderPath, files); }
    }),
    writable: false,
    enumerable: true,
    configurable: false
  });
  window.dispatchEvent(new CustomEvent('desktopapiready'));
})();
"""


def bridge_script(platform: Optional[str] = None) -> str:
    """Return the JavaScript that installs window.desktopAPI."""
    return _BRIDGE_TEMPLATE % {"platform": json.dumps(platform or sys.platform)}


class DesktopApi:
    """
    JavaScript API exposed to the web view.

    Parameters
    ----------
    storage : FileStorage, optional
        Performs the actual writes; a fresh FileStorage by default.
    """

    def __init__(self, storage: Optional[FileStorage] = None) -> None:
        self._storage = storage or FileStorage()
        self._window = None

    def _attach(self, window) -> None:
        """Bind the native window used as parent for dialogs."""
        self._window = window

    # ------------------------------------------------------------------
    # Exposed operations
    # ------------------------------------------------------------------

    def select_folder(self) -> Optional[str]:
        """
        Open the native folder picker.

        Returns the chosen absolute path, or None when the user cancels.
        """
        if self._window is None:
            logger.warning("Folder dialog requested before the window exists")
            return None

        result = self._window.create_file_dialog(webview.FileDialog.FOLDER)
        if result:
            folder = result if isinstance(result, str) else result[0]
            logger.info("Folder selected: %s", folder)
            return folder

        logger.debug("Folder selection cancelled")
        return None

    def save_file(self, file_path: str, data: str) -> SaveResult:
        """Write one data URI to *file_path*."""
        return self._storage.save_file(file_path, data)

    def save_files(self, folder_path: str, files: Iterable[FileEntry]) -> BatchResult:
        """Write a batch of data URIs into *folder_path*."""
        return self._storage.save_files(folder_path, files)

    def get_platform(self) -> str:
        """Return the host platform identifier ('win32', 'darwin', 'linux', …)."""
        return sys.platform
