"""
exinspector - normalize an exception and its causes into one stack trace.

The inspector reads the traceback of an exception, turns it into frames with
the raise location first, strips error-handling frames and merges the frames
of the exceptions that caused it, so chained exceptions read as a single,
de-duplicated trace.

Example usage:
    >>> import exinspector
    >>> try:
    ...     raise ValueError("Something went wrong")
    ... except Exception as e:
    ...     inspector = exinspector.Inspector(e)
    ...     frames = inspector.get_frames()
    ...     print(exinspector.format_frames(inspector))
"""

from .config import DocrefSettings, InspectorConfig
from .exceptions import (
    InspectorError,
    InvalidArgumentError,
    OutOfRangeError,
    ReadOnlyError,
    UnexpectedValueError,
)
from .models import Comment, RawFrame
from .frame import Frame
from .collection import FrameCollection
from .inspector import Inspector
from .formatter import format_frames
from .utils import extract_docref, is_application_path, mark_application_frames

__version__ = "1.0.0"
__description__ = "Normalize exceptions and their causal chain into structured stack frames"

# Main API exports
__all__ = [
    # Core functionality
    "Inspector",
    "Frame",
    "FrameCollection",
    "format_frames",
    # Data models
    "RawFrame",
    "Comment",
    # Configuration
    "InspectorConfig",
    "DocrefSettings",
    # Errors
    "InspectorError",
    "InvalidArgumentError",
    "OutOfRangeError",
    "ReadOnlyError",
    "UnexpectedValueError",
    # Utilities
    "extract_docref",
    "is_application_path",
    "mark_application_frames",
    # Version info
    "__version__",
]


# Example usage function
def demo() -> None:
    """
    Demonstrate the library functionality with a sample exception chain.
    """
    import json

    def boom(n: int) -> float:
        return 10 / n  # ZeroDivisionError when n == 0

    try:
        try:
            boom(0)
        except Exception as inner:
            raise ValueError("Wrapped failure") from inner
    except Exception as e:
        inspector = Inspector(e)

        print("=== FRAMES ===")
        print(
            json.dumps(
                [frame.to_dict() for frame in inspector.get_frames()],
                ensure_ascii=False,
                indent=2,
                default=repr,
            )
        )

        print("\n\n=== FORMATTED ===")
        print(format_frames(inspector))


if __name__ == "__main__":
    demo()
