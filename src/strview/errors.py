"""Error definitions for string views."""

# ============================================================================
#                           General view errors
# ============================================================================


class StringViewError(Exception):
    """Base class for string view errors."""


class ViewOutOfRangeError(StringViewError, IndexError):
    """Raised when a position falls outside the bounds of a view."""

    def __init__(self, operation: str, pos: int, size: int) -> None:
        super().__init__(
            f"StringView.{operation}: position {pos} is out of range "
            f"for a view of size {size}."
        )
        self.operation = operation
        self.pos = pos
        self.size = size


# ============================================================================
#                           Construction errors
# ============================================================================


class InvalidSpanError(StringViewError, ValueError):
    """Raised when an explicit (offset, length) pair does not fit its source."""

    def __init__(self, offset: int, length: int, capacity: int) -> None:
        super().__init__(
            f"Span [{offset}, {offset + length}) does not fit in a source "
            f"of {capacity} bytes."
        )
        self.offset = offset
        self.length = length
        self.capacity = capacity


class UnterminatedStringError(StringViewError, ValueError):
    """Raised when no null terminator follows the start of a C string."""

    def __init__(self, offset: int) -> None:
        super().__init__(f"No null terminator found at or after offset {offset}.")
        self.offset = offset
