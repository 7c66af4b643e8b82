"""
storage.py – Writing front-end payloads to disk.

This module contains FileStorage, the single class responsible for all
file I/O requested by the front-end:

  - Decoding a data URI (or bare base64 string) into raw bytes.
  - Writing one decoded payload to a chosen path.
  - Writing a batch of payloads into a folder, one independent write per
    entry, collecting a per-file result.

Failures never leave this module as exceptions: they are logged and turned
into result dictionaries (see models.py) so the bridge can hand them to the
front-end as plain data.

Decoding problems are reported through the DataUriError exception so that
callers using decode_data_uri() directly can tell them apart from I/O errors.
"""

import base64
import binascii
import logging
import os
import re
from typing import Iterable, List

from config import APP_NAME
from models import BatchResult, FileEntry, FileResult, SaveResult

logger = logging.getLogger(APP_NAME)

# "data:<mime>;base64," with any (possibly empty) MIME type and parameters.
_DATA_URI_PREFIX = re.compile(r"^data:[^,]*?;base64,", re.IGNORECASE)

# Line breaks and padding spaces inside MIME-style wrapped base64.
_WHITESPACE = re.compile(r"\s+")


class DataUriError(ValueError):
    """Raised when a payload is not a decodable data URI / base64 string."""


def decode_data_uri(data: str) -> bytes:
    """
    Return the bytes encoded in *data*.

    A leading 'data:<mime>;base64,' prefix is stripped; without it the whole
    string is taken as base64.  Whitespace from wrapped lines is ignored;
    otherwise decoding is strict: characters outside the base64 alphabet or
    broken padding raise DataUriError.
    """
    if not isinstance(data, str):
        raise DataUriError(f"Expected a string payload, got {type(data).__name__}")

    payload = _WHITESPACE.sub("", _DATA_URI_PREFIX.sub("", data, count=1))
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DataUriError(f"Invalid base64 data: {exc}") from exc


def join_in_folder(folder_path: str, name: str) -> str:
    """
    Join *name* onto *folder_path*, keeping the result inside the folder
    even when *name* is absolute (leading separators and drive are dropped).
    """
    relative = os.path.splitdrive(name)[1].lstrip("/\\")
    return os.path.join(folder_path, relative)


class FileStorage:
    """
    Writes decoded payloads to the filesystem.

    The class holds no state between calls; every write opens and closes
    its own file handle and overwrites whatever is already at the target.
    """

    # ------------------------------------------------------------------
    # Low-level write
    # ------------------------------------------------------------------

    @staticmethod
    def write_payload(file_path: str, data: str) -> int:
        """
        Decode *data* and write it to *file_path*, creating or overwriting
        the file.  Returns the number of bytes written.

        Raises DataUriError for a bad payload (nothing is written) and
        OSError for filesystem failures.
        """
        content = decode_data_uri(data)
        with open(file_path, "wb") as fh:
            fh.write(content)
        return len(content)

    # ------------------------------------------------------------------
    # Bridge operations
    # ------------------------------------------------------------------

    def save_file(self, file_path: str, data: str) -> SaveResult:
        """
        Save one data URI to *file_path*.

        Returns {"success": True} or {"success": False, "error": message}.
        """
        try:
            size = self.write_payload(file_path, data)
        except Exception as exc:
            logger.exception("Failed to save file %s", file_path)
            return {"success": False, "error": str(exc)}

        logger.info("Saved %s (%d bytes)", file_path, size)
        return {"success": True}

    def save_files(self, folder_path: str, files: Iterable[FileEntry]) -> BatchResult:
        """
        Save every entry of *files* into *folder_path*, in order.

        Each entry is written independently: a failing entry is recorded in
        'results' and the loop moves on.  Earlier writes are never rolled
        back.  Entries sharing a name are all attempted and all reported;
        the last one wins on disk.

        The batch-level 'success' is True once the loop has run, whatever
        the per-file outcomes; only a failure outside the per-file handling
        returns {"success": False, "error": message}.
        """
        try:
            results: List[FileResult] = []

            for entry in files:
                name = entry.get("name") if isinstance(entry, dict) else None
                try:
                    if not isinstance(entry, dict):
                        raise TypeError(
                            f"File entry must be an object, got {type(entry).__name__}"
                        )
                    if not isinstance(name, str):
                        raise TypeError("File entry is missing a 'name'")
                    if "data" not in entry:
                        raise TypeError(f"File entry {name!r} is missing 'data'")

                    target = join_in_folder(folder_path, name)
                    size = self.write_payload(target, entry["data"])
                    logger.debug("Saved %s (%d bytes)", target, size)
                    results.append({"name": name, "success": True})
                except Exception as exc:
                    logger.exception("Failed to save file %s", name)
                    results.append({"name": name, "success": False, "error": str(exc)})

            failed = sum(1 for r in results if not r["success"])
            logger.info(
                "Batch save into %s: %d file(s), %d failed",
                folder_path, len(results), failed,
            )
            return {"success": True, "results": results}

        except Exception as exc:
            logger.exception("Batch save into %s failed", folder_path)
            return {"success": False, "error": str(exc)}
