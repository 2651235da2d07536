"""Formatting utilities for inspected exceptions."""

from typing import List

from .frame import Frame
from .inspector import Inspector
from .trace import get_type_name


def format_frames(
    inspector: Inspector, *, context_lines: int = 2, include_comments: bool = True
) -> str:
    """
    Format the normalized frames of an inspected exception into human-readable text.

    Parameters:
        inspector: Inspector wrapping the exception to show
        context_lines: How many source lines to show around each frame's line,
            0 to leave source out
        include_comments: Whether to include the comments attached to frames

    Returns:
        A formatted string suitable for logging or display
    """
    lines = []

    # Header
    lines.append("=" * 80)
    lines.append(f"{inspector.get_exception_name()}: {inspector.get_exception_message()}")
    lines.append("=" * 80)

    docref_url = inspector.get_exception_docref_url()
    if docref_url:
        lines.append(f"Documentation: {docref_url}")

    # Causal chain
    previous = inspector.get_previous_exceptions()
    if previous:
        lines.append("\nCaused by:")
        messages = inspector.get_previous_exception_messages()
        codes = inspector.get_previous_exception_codes()
        for exc, message, code in zip(previous, messages, codes):
            suffix = f" (code {code})" if code else ""
            lines.append(f"  {get_type_name(exc)}: {message}{suffix}")

    frames = inspector.get_frames()
    lines.append(
        f"\nFrames ({len(frames)}, {frames.count_is_application()} in application):"
    )

    for index, frame in enumerate(frames):
        # Mark external frames
        marker = "  " if frame.is_application() else "  [external] "

        lines.append(f"{marker}#{index} {_location(frame)}")

        if context_lines > 0:
            lines.extend(_source(frame, context_lines, marker))

        if include_comments:
            for comment in frame.get_comments():
                lines.append(f"{marker}  {comment.context} {comment.comment}")

    lines.append("=" * 80)
    return "\n".join(lines)


def _location(frame: Frame) -> str:
    call = frame.get_function() or ""
    if frame.get_class():
        call = f"{frame.get_class()}.{call}" if call else frame.get_class()
    file = frame.get_file() or "Unknown"
    if call:
        return f'File "{file}", line {frame.get_line()}, in {call}'
    return f'File "{file}", line {frame.get_line()}'


def _source(frame: Frame, context_lines: int, marker: str) -> List[str]:
    line = frame.get_line()
    if line < 1:
        return []

    # Frame lines are 1-based, file lines are keyed from 0
    current = line - 1
    start = max(0, current - context_lines)
    source = frame.get_file_lines(start, current - start + context_lines + 1)
    if not source:
        return []

    out = []
    for index, text in source.items():
        pointer = ">" if index == current else " "
        out.append(f"{marker}  {pointer} {index + 1:4d} | {text.rstrip()}")
    return out
