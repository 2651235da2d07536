"""A single normalized stack frame."""

import logging
from dataclasses import replace
from typing import Any, Dict, List, Mapping, Optional, Union

from .constants import (
    DEFAULT_COMMENT_CONTEXT,
    EVAL_FILE_PATTERN,
    UNKNOWN_FILE,
    UNREADABLE_FILES,
)
from .exceptions import InvalidArgumentError
from .models import Comment, RawFrame


logger = logging.getLogger(__name__)


class Frame:
    """Wraps one captured stack record.

    Besides read access to the record, a frame carries annotations added by
    consumers (``add_comment``) and a flag telling whether it belongs to the
    application or to library code.
    """

    def __init__(self, frame: Union[RawFrame, Mapping[str, Any]]) -> None:
        # keep a copy, the captured record is left as it was
        if isinstance(frame, RawFrame):
            frame = replace(frame)
        else:
            frame = RawFrame.from_dict(frame)
        self._frame = frame
        self._file_contents_cache: Optional[str] = None
        self._file_contents_loaded = False
        self._comments: List[Comment] = []
        self._application = False

    def __repr__(self) -> str:
        return f"<Frame {self.get_file()}:{self.get_line()} {self.get_function()}>"

    def get_comments(self, filter: Optional[str] = None) -> List[Comment]:
        """
        Return all comments for this frame, or only those added under the
        context named by ``filter``.
        """
        if filter is None:
            return list(self._comments)
        return [c for c in self._comments if c.context == filter]

    def add_comment(self, comment: str, context: str = DEFAULT_COMMENT_CONTEXT) -> None:
        """
        Add a comment to this frame so other handlers can pick it up, e.g. a
        formatter printing annotations under the source of each frame.

        ``context`` identifies the origin of the comment.
        """
        self._comments.append(Comment(comment=comment, context=context))

    def is_application(self) -> bool:
        return self._application

    def set_application(self, application: bool) -> None:
        self._application = bool(application)

    def get_file(self) -> Optional[str]:
        file = self._frame.file
        if not file:
            return None

        # Code run through eval() reports "<path>(<line>) : eval()'d code";
        # point the frame at the real location instead.
        match = EVAL_FILE_PATTERN.match(file)
        if match:
            file = self._frame.file = match.group(1)
            self._frame.line = int(match.group(2))

        return file

    def get_line(self) -> int:
        return self._frame.line

    def get_class(self) -> Optional[str]:
        return self._frame.class_name or None

    def get_function(self) -> Optional[str]:
        return self._frame.function or None

    def get_args(self) -> List[Any]:
        return self._frame.args

    def get_file_contents(self) -> Optional[str]:
        """Return the full contents of this frame's file, if it can be read."""
        if self._file_contents_loaded:
            return self._file_contents_cache

        path = self.get_file()
        if path is None or path in UNREADABLE_FILES:
            return None

        try:
            with open(path, encoding="utf-8", newline="") as f:
                self._file_contents_cache = f.read()
        except (OSError, UnicodeDecodeError) as e:
            # extension and frozen module paths cannot be opened
            logger.debug("Source of %s is not available: %s", path, e)
        self._file_contents_loaded = True

        return self._file_contents_cache

    def get_raw_frame(self) -> RawFrame:
        """Return the record this frame was built from."""
        return self._frame

    def get_file_lines(
        self, start: int = 0, length: Optional[int] = None
    ) -> Optional[Dict[int, str]]:
        """
        Return the lines of this frame's file keyed by zero-based line index,
        optionally limited to ``length`` lines starting at ``start``.

        Keys always refer to the physical line, so ``get_file_lines(9, 1)``
        returns ``{9: "..."}``.

        Raises:
          InvalidArgumentError: if ``length`` is lower than or equal to 0.
        """
        contents = self.get_file_contents()
        if contents is None:
            return None

        lines = contents.split("\n")

        if length is None:
            return dict(enumerate(lines))

        if start < 0:
            start = 0

        if length <= 0:
            raise InvalidArgumentError(
                f"You provided a invalid value [{length}] for $length, "
                "$length cannot be lower or equal to 0."
            )

        return {i: lines[i] for i in range(start, min(start + length, len(lines)))}

    def equals(self, frame: "Frame") -> bool:
        """Frames are equal when they point at the same known file and line."""
        file = self.get_file()
        if file is None or file == UNKNOWN_FILE:
            return False
        return frame.get_file() == file and frame.get_line() == self.get_line()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data = self._frame.to_dict()
        data["file"] = self.get_file()
        data["line"] = self.get_line()
        data["application"] = self._application
        data["comments"] = [
            {"comment": c.comment, "context": c.context} for c in self._comments
        ]
        return data
