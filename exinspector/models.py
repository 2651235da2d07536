"""Data models for captured stack records."""

from dataclasses import dataclass, field
from typing import Any, Optional, Dict, List, Mapping

from .exceptions import InvalidArgumentError


@dataclass
class RawFrame:
    """One captured stack record.

    ``file`` and ``line`` locate the call site, ``function`` and ``class_name``
    name what was called there and ``args`` holds the passed values.
    """

    file: Optional[str] = None
    line: int = 0
    class_name: Optional[str] = None
    function: Optional[str] = None
    args: List[Any] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.line is None:
            self.line = 0
        self.line = int(self.line)
        if self.line < 0:
            raise InvalidArgumentError(f"Line cannot be negative, got [{self.line}].")
        if self.args is None:
            self.args = []
        else:
            self.args = list(self.args)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the ``{file, line, class, function, args}`` record shape."""
        return {
            "file": self.file,
            "line": self.line,
            "class": self.class_name,
            "function": self.function,
            "args": list(self.args),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RawFrame":
        """Create from a record where every key is optional."""
        return cls(
            file=data.get("file"),
            line=data.get("line", 0),
            class_name=data.get("class"),
            function=data.get("function"),
            args=data.get("args", []),
        )


@dataclass
class Comment:
    """Annotation attached to a frame."""

    comment: str
    context: str
