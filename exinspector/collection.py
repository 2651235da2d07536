"""Ordered, read-only collection of frames."""

from typing import Any, Callable, Iterable, Iterator, List, Mapping, Union

from .exceptions import OutOfRangeError, ReadOnlyError, UnexpectedValueError
from .frame import Frame
from .models import RawFrame


class FrameCollection:
    """
    Frames of one exception, most recent call first.

    Index access is read-only. ``filter``, ``map`` and ``prepend_frames``
    modify the collection in place; ``filter`` and ``map`` return it so calls
    can be chained.
    """

    def __init__(self, frames: Iterable[Union[RawFrame, Mapping[str, Any]]]) -> None:
        self._frames: List[Frame] = [Frame(frame) for frame in frames]

    def __repr__(self) -> str:
        return f"<{type(self).__name__} of {len(self._frames)} frames>"

    def filter(self, predicate: Callable[[Frame], bool]) -> "FrameCollection":
        """Keep only the frames for which ``predicate`` returns true."""
        self._frames = [frame for frame in self._frames if predicate(frame)]
        return self

    def map(self, transform: Callable[[Frame], Frame]) -> "FrameCollection":
        """
        Replace every frame with the result of ``transform``.

        Raises:
          UnexpectedValueError: if ``transform`` returns anything but a Frame.
        """

        def checked(frame: Frame) -> Frame:
            result = transform(frame)
            if not isinstance(result, Frame):
                raise UnexpectedValueError(
                    f"Callable to {type(self).__name__}.map must return a Frame object"
                )
            return result

        self._frames = [checked(frame) for frame in self._frames]
        return self

    def get_array(self) -> List[Frame]:
        """Return a list of all frames, changing it leaves the collection alone."""
        return list(self._frames)

    def __iter__(self) -> Iterator[Frame]:
        return iter(self.get_array())

    def __getitem__(self, index: int) -> Frame:
        if not 0 <= index < len(self._frames):
            raise OutOfRangeError(f"Frame[{index}] was not found.")
        return self._frames[index]

    def __setitem__(self, index: int, value: Any) -> None:
        raise ReadOnlyError("offsetSet", type(self).__name__)

    def __delitem__(self, index: int) -> None:
        raise ReadOnlyError("offsetUnset", type(self).__name__)

    def __len__(self) -> int:
        return len(self._frames)

    def count(self) -> int:
        return len(self._frames)

    def count_is_application(self) -> int:
        """Count the frames that belong to the application."""
        return sum(1 for frame in self._frames if frame.is_application())

    def prepend_frames(self, frames: Iterable[Frame]) -> None:
        """Put ``frames``, usually those of an outer exception, before the current ones."""
        self._frames = list(frames) + self._frames

    def top_diff(self, parent_frames: "FrameCollection") -> List[Frame]:
        """
        Return the frames of this collection that are not part of the call
        path it shares with ``parent_frames``.

        Both collections are compared position by position from their oldest
        frame upward; a frame is dropped when it equals the frame at the same
        distance from the end of ``parent_frames``. Neither collection is
        modified.
        """
        diff: List[Any] = list(self._frames)
        parent = parent_frames.get_array()

        p = len(parent) - 1
        i = len(diff) - 1
        while i >= 0 and p >= 0:
            if diff[i].equals(parent[p]):
                diff[i] = None
            i -= 1
            p -= 1

        return [frame for frame in diff if frame is not None]

    def copy(self) -> "FrameCollection":
        """Return a new collection over the same Frame objects."""
        clone = type(self).__new__(type(self))
        clone._frames = list(self._frames)
        return clone

    __copy__ = copy
