"""
models.py – Shapes of the data passed across the front-end bridge.

Everything here is a TypedDict: values stay plain dicts so pywebview can
serialize them to JavaScript objects unchanged.  The 'success' key is the
discriminator callers inspect before reading 'error'.
"""

from typing import List, NotRequired, Optional, TypedDict


class FileEntry(TypedDict):
    """One file of a batch: target file name and its data URI payload."""

    name: str
    data: str


class SaveResult(TypedDict):
    """Outcome of a single write."""

    success: bool
    error: NotRequired[str]


class FileResult(TypedDict):
    """
    Outcome of one entry of a batch, keyed by the entry's name.

    'name' is None when the entry was malformed and had no readable name.
    """

    name: Optional[str]
    success: bool
    error: NotRequired[str]


class BatchResult(TypedDict):
    """
    Outcome of a batch save.

    'success' only says whether the batch ran; per-file outcomes are in
    'results', in input order.  When the batch could not run at all,
    'results' is absent and 'error' carries the reason.
    """

    success: bool
    results: NotRequired[List[FileResult]]
    error: NotRequired[str]


__all__ = [
    "BatchResult",
    "FileEntry",
    "FileResult",
    "SaveResult",
]
