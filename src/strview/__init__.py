"""STRVIEW

Non-owning, read-only string views over existing byte storage. A view names
a window of a buffer without copying it, so interfaces can accept owned
strings, literals and buffer ranges through one lightweight type.
"""

from .errors import (
    InvalidSpanError,
    StringViewError,
    UnterminatedStringError,
    ViewOutOfRangeError,
)
from .view import NPOS, StringView

__all__ = [
    "__version__",
    "NPOS",
    "StringView",
    "StringViewError",
    "ViewOutOfRangeError",
    "InvalidSpanError",
    "UnterminatedStringError",
]
__version__ = "0.1.0"
