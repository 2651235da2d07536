"""Utility functions for exception inspection."""

import os
import sys
import logging
from typing import Iterable, Optional, Tuple

from .collection import FrameCollection
from .config import DocrefSettings
from .constants import DOCREF_PATTERN, UNREADABLE_FILES
from .frame import Frame


logger = logging.getLogger(__name__)


def extract_docref(
    message: str, settings: Optional[DocrefSettings] = None
) -> Tuple[str, Optional[str]]:
    """
    Split an embedded documentation link off ``message``.

    Returns the message with the first ``[<a href='URL'>text</a>]`` removed
    and the URL, or the untouched message and None when there is no link or
    the doc-reference settings are not available.
    """
    settings = settings or DocrefSettings()
    if not settings.available():
        logger.debug("Doc-reference settings unavailable, keeping message as is")
        return message, None

    match = DOCREF_PATTERN.search(message)
    if match is None:
        return message, None

    return DOCREF_PATTERN.sub("", message, count=1), match.group(1)


def is_application_path(path: Optional[str], app_paths: Iterable[str] = ()) -> bool:
    """
    Decide whether ``path`` belongs to the application.

    With ``app_paths`` only files below one of them count. Without, anything
    outside the standard library and site/dist-packages counts.
    """
    if not path or path in UNREADABLE_FILES or path.startswith("<"):
        return False

    abs_path = os.path.abspath(path)
    app_paths = tuple(app_paths)
    if app_paths:
        return any(
            abs_path == os.path.abspath(p) or abs_path.startswith(os.path.abspath(p) + os.sep)
            for p in app_paths
        )

    # crude heuristic similar to how many SDKs differentiate framework vs app frames
    stdlib = os.__file__.rsplit(os.sep, 2)[0]
    if abs_path.startswith(stdlib):
        return False
    site = next(
        (p for p in sys.path if "site-packages" in p or "dist-packages" in p), None
    )
    if site and abs_path.startswith(site):
        return False
    return True


def mark_application_frames(
    frames: FrameCollection, app_paths: Iterable[str] = ()
) -> FrameCollection:
    """Set the application flag on every frame of ``frames``."""
    app_paths = tuple(app_paths)

    def mark(frame: Frame) -> Frame:
        frame.set_application(is_application_path(frame.get_file(), app_paths))
        return frame

    return frames.map(mark)
