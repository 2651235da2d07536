"""Normalized view of an exception and the exceptions that caused it."""

import logging
import threading
from dataclasses import replace
from typing import FrozenSet, List, Optional

from .collection import FrameCollection
from .config import InspectorConfig
from .constants import EXCEPTION_MESSAGE_CONTEXT, INTERNAL_FILE
from .models import RawFrame
from .trace import (
    extract_trace,
    get_code,
    get_message,
    get_origin,
    get_previous,
    get_type_name,
)
from .utils import extract_docref, mark_application_frames


logger = logging.getLogger(__name__)


class Inspector:
    """
    Wraps one exception.

    Everything derived from the exception is computed on first access and
    cached for the lifetime of the inspector. First access is serialized per
    inspector, so concurrent callers compute each value once.
    """

    def __init__(
        self,
        exception: BaseException,
        config: Optional[InspectorConfig] = None,
        *,
        _seen: FrozenSet[int] = frozenset(),
    ) -> None:
        self._exception = exception
        self._config = config or InspectorConfig()
        # ids of the exceptions wrapped by the inspectors above this one
        self._seen = _seen | {id(exception)}
        self._lock = threading.RLock()

        self._frames: Optional[FrameCollection] = None
        self._previous_exception_inspector: Optional["Inspector"] = None
        self._previous_exceptions: Optional[List[BaseException]] = None
        self._exception_message: Optional[str] = None
        self._exception_url: Optional[str] = None
        self._docref_extracted = False

    def __repr__(self) -> str:
        return f"<Inspector {self.get_exception_name()}>"

    @property
    def config(self) -> InspectorConfig:
        return self._config

    def get_exception(self) -> BaseException:
        return self._exception

    def get_exception_name(self) -> str:
        return get_type_name(self._exception)

    def get_exception_code(self) -> int:
        return get_code(self._exception)

    def get_exception_message(self) -> str:
        """Message of the exception without embedded documentation links."""
        self._extract_docref()
        return self._exception_message

    def get_exception_docref_url(self) -> Optional[str]:
        """Documentation URL embedded in the exception message, if any."""
        self._extract_docref()
        return self._exception_url

    def _extract_docref(self) -> None:
        if self._docref_extracted:
            return
        with self._lock:
            if not self._docref_extracted:
                self._exception_message, self._exception_url = extract_docref(
                    get_message(self._exception), self._config.docref
                )
                self._docref_extracted = True

    def _previous(self) -> Optional[BaseException]:
        previous = get_previous(self._exception)
        if previous is None:
            return None
        if id(previous) in self._seen:
            logger.debug(
                "Exception chain of %s loops back, stopping", self.get_exception_name()
            )
            return None
        # _seen holds this exception too, so it counts one more than the predecessors
        if len(self._seen) > self._config.max_chain_depth:
            logger.debug(
                "Exception chain cut at max_chain_depth=%d", self._config.max_chain_depth
            )
            return None
        return previous

    def has_previous_exception(self) -> bool:
        return self._previous_exception_inspector is not None or self._previous() is not None

    def get_previous_exception_inspector(self) -> Optional["Inspector"]:
        """Return an Inspector for the exception that caused this one, if any."""
        if self._previous_exception_inspector is None:
            with self._lock:
                if self._previous_exception_inspector is None:
                    previous = self._previous()
                    if previous is not None:
                        self._previous_exception_inspector = type(self)(
                            previous, self._config, _seen=self._seen
                        )
        return self._previous_exception_inspector

    def get_previous_exceptions(self) -> List[BaseException]:
        """Return every exception of the causal chain below this one, closest first."""
        if self._previous_exceptions is None:
            with self._lock:
                if self._previous_exceptions is None:
                    self._previous_exceptions = self._walk_chain()
        return list(self._previous_exceptions)

    def _walk_chain(self) -> List[BaseException]:
        chain: List[BaseException] = []
        visited = {id(self._exception)}
        prev = get_previous(self._exception)
        while prev is not None and id(prev) not in visited:
            if len(chain) >= self._config.max_chain_depth:
                logger.debug(
                    "Exception chain cut at max_chain_depth=%d", self._config.max_chain_depth
                )
                break
            visited.add(id(prev))
            chain.append(prev)
            prev = get_previous(prev)
        return chain

    def get_previous_exception_messages(self) -> List[str]:
        return [
            extract_docref(get_message(prev), self._config.docref)[0]
            for prev in self.get_previous_exceptions()
        ]

    def get_previous_exception_codes(self) -> List[int]:
        return [get_code(prev) for prev in self.get_previous_exceptions()]

    def get_frames(self) -> FrameCollection:
        """
        Return the normalized frames of the exception, most recent call first.

        The first frame is where the exception was raised. When the exception
        has a cause, the frames of the cause follow the frames unique to this
        exception, so the whole chain reads as one trace.
        """
        if self._frames is None:
            with self._lock:
                if self._frames is None:
                    self._frames = self._build_frames()
        return self._frames

    def _build_frames(self) -> FrameCollection:
        frames = list(self._get_trace())
        file, line = get_origin(self._exception)

        # Fill in positions lost by call indirections
        for k, frame in enumerate(frames):
            if frame.file:
                continue
            next_frame = frames[k + 1] if k + 1 < len(frames) else None
            if next_frame is not None and self._is_indirection(next_frame):
                frames[k] = replace(frame, file=next_frame.file, line=next_frame.line)
            else:
                frames[k] = replace(frame, file=INTERNAL_FILE, line=0)

        # Drop error handling frames above the point the exception came from
        i = 0
        for k, frame in enumerate(frames):
            if frame.file == file and frame.line == line:
                i = k
        if i > 0:
            del frames[:i]

        frames.insert(0, self._frame_from_exception())

        collection = FrameCollection(frames)

        previous_inspector = self.get_previous_exception_inspector()
        if previous_inspector is not None:
            # Keep outer frames on top of the inner ones
            outer_frames = collection
            collection = previous_inspector.get_frames().copy()

            if len(collection):
                collection[0].add_comment(
                    previous_inspector.get_exception_message(),
                    EXCEPTION_MESSAGE_CONTEXT,
                )

            collection.prepend_frames(outer_frames.top_diff(collection))

        return mark_application_frames(collection, self._config.application_paths)

    def _get_trace(self) -> List[RawFrame]:
        return extract_trace(self._exception, self._config.max_frames)

    def _frame_from_exception(self) -> RawFrame:
        file, line = get_origin(self._exception)
        return RawFrame(
            file=file,
            line=line,
            class_name=self.get_exception_name(),
            args=[get_message(self._exception)],
        )

    def _is_indirection(self, frame: RawFrame) -> bool:
        """
        Whether ``frame`` is a call indirection whose position belongs to the
        frame before it.
        """
        if not frame.file:
            return False
        function = (frame.function or "").lower()
        return any(marker.lower() in function for marker in self._config.indirection_markers)
