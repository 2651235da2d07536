"""Read the data the inspector needs from Python exceptions."""

import logging
import inspect
from types import FrameType, TracebackType
from typing import Any, List, Optional, Tuple

from .constants import DEFAULT_MAX_FRAMES
from .models import RawFrame


logger = logging.getLogger(__name__)


def get_previous(exc: BaseException) -> Optional[BaseException]:
    """
    Return the exception that led to ``exc``, following Python's chaining
    rules: the explicit ``__cause__`` first, then ``__context__`` unless it
    was suppressed with ``raise ... from None``.
    """
    if exc.__cause__ is not None:
        return exc.__cause__
    if not exc.__suppress_context__ and exc.__context__ is not None:
        return exc.__context__
    return None


def get_code(exc: BaseException) -> int:
    """Return the numeric code of ``exc``: its ``code``, its ``errno`` or 0."""
    for attr in ("code", "errno"):
        value = getattr(exc, attr, None)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    return 0


def get_message(exc: BaseException) -> str:
    try:
        return str(exc)
    except Exception:
        try:
            return repr(exc)
        except Exception:
            return f"<unprintable {type(exc).__name__}>"


def get_type_name(exc: BaseException) -> str:
    """Qualified type name of ``exc``; builtins stay unqualified."""
    exc_type = type(exc)
    module = getattr(exc_type, "__module__", None)
    if module and module != "builtins":
        return f"{module}.{exc_type.__qualname__}"
    return exc_type.__qualname__


def get_origin(exc: BaseException) -> Tuple[Optional[str], int]:
    """Return the file and line ``exc`` was raised at."""
    tb: Optional[TracebackType] = exc.__traceback__
    if tb is None:
        return None, 0
    while tb.tb_next is not None:
        tb = tb.tb_next
    return tb.tb_frame.f_code.co_filename, tb.tb_lineno or 0


def _stack(exc: BaseException) -> List[Tuple[FrameType, int]]:
    """Frames from the outermost caller down to the raise point."""
    tb: Optional[TracebackType] = exc.__traceback__
    entries: List[Tuple[FrameType, int]] = []
    while tb is not None:
        entries.append((tb.tb_frame, tb.tb_lineno or 0))
        tb = tb.tb_next

    if not entries:
        return entries

    # The traceback starts at the frame that caught the exception, the callers
    # above it are only reachable through f_back.
    outer: List[Tuple[FrameType, int]] = []
    frame = entries[0][0].f_back
    while frame is not None:
        outer.append((frame, frame.f_lineno or 0))
        frame = frame.f_back
    outer.reverse()

    return outer + entries


def _class_name(frame: FrameType) -> Optional[str]:
    code = frame.f_code
    if not code.co_argcount:
        return None
    first = code.co_varnames[0]
    value = frame.f_locals.get(first)
    if first == "self" and value is not None:
        return type(value).__name__
    if first == "cls" and isinstance(value, type):
        return value.__name__
    return None


def _arguments(frame: FrameType, skip_first: bool) -> List[Any]:
    code = frame.f_code
    names = list(code.co_varnames[: code.co_argcount])
    if skip_first:
        names = names[1:]
    local_vars = frame.f_locals
    args = [local_vars[name] for name in names if name in local_vars]

    if code.co_flags & inspect.CO_VARARGS:
        varargs = code.co_varnames[code.co_argcount + code.co_kwonlyargcount]
        args.extend(local_vars.get(varargs, ()))

    return args


def extract_trace(exc: BaseException, max_frames: int = DEFAULT_MAX_FRAMES) -> List[RawFrame]:
    """
    Build the raw trace of ``exc``, most recent call first.

    Each record names the called function and the position of the call in
    its caller. The outermost frame is the entry point and gets no record of
    its own.
    """
    stack = _stack(exc)
    records: List[RawFrame] = []

    for k in range(len(stack) - 1, 0, -1):
        if len(records) >= max_frames:
            logger.debug(
                "Trace of %s truncated at max_frames=%d", type(exc).__name__, max_frames
            )
            break

        callee, _ = stack[k]
        caller, caller_line = stack[k - 1]
        class_name = _class_name(callee)

        records.append(
            RawFrame(
                file=caller.f_code.co_filename,
                line=caller_line,
                class_name=class_name,
                function=callee.f_code.co_name,
                args=_arguments(callee, skip_first=class_name is not None),
            )
        )

    return records
