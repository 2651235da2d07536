"""Errors raised by the exinspector library."""


class InspectorError(Exception):
    """Base class for all exinspector errors."""


class InvalidArgumentError(InspectorError, ValueError):
    """An argument is outside of its accepted range."""


class OutOfRangeError(InspectorError, IndexError):
    """A frame position does not exist in a collection."""


class UnexpectedValueError(InspectorError, ValueError):
    """A callback returned a value of the wrong type."""


class ReadOnlyError(InspectorError, TypeError):
    """A write was attempted on a read-only object."""

    def __init__(self, function_name: str, class_name: str) -> None:
        self.function_name = function_name
        self.class_name = class_name
        super().__init__(
            f"Calling [{function_name}] method on read-only object [{class_name}] is not allowed."
        )
