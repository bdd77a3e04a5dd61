"""Non-owning, read-only views over contiguous byte storage.

A `StringView` references a window of an existing buffer (``bytes``,
``bytearray``, ``memoryview``, ``mmap`` and any other object exposing the
buffer protocol) as an ``(base, offset, length)`` triple. Creating a view,
sub-slicing it or trimming it never copies the referenced bytes; only the
explicit conversions (`StringView.to_string`, `StringView.to_bytearray`,
`StringView.decode`) produce owned copies.

Views are byte-wise: elements are ``int`` values in ``range(256)``, equality
and ordering compare unsigned bytes, and no encoding is applied except when a
``str`` is used as a source, in which case it is encoded with
`strview.config.get_default_encoding`.

Lifetime
--------
A view keeps its base buffer exported for as long as the view exists. Content
changes made through a mutable source (e.g. assigning into a ``bytearray``)
are visible through the view; resizing an exported ``bytearray`` fails with
``BufferError``.

Typical usage
-------------
    view = StringView(b"hello world")
    view.find("world")        # 6
    view.substr(6) == "world" # True
    view.remove_prefix(10)    # clamps, no error
"""

from __future__ import annotations

import logging
from collections.abc import Buffer, Iterator
from functools import total_ordering
from typing import IO, TYPE_CHECKING, Any

from .config import get_default_encoding
from .errors import InvalidSpanError, UnterminatedStringError, ViewOutOfRangeError
from .search import compare, naive_search

if TYPE_CHECKING:
    from typing import Self

__all__ = ["NPOS", "StringView"]

logger = logging.getLogger(__name__)

# "Not found" marker returned by `StringView.find`, and "rest of the view"
# marker accepted by `StringView.substr`.
NPOS = -1

_EMPTY = memoryview(b"")

type ViewSource = StringView | str | Buffer
type Needle = ViewSource | int


def _export(source: str | Buffer) -> memoryview:
    """Return a flat, read-only, byte-formatted memoryview over ``source``.

    Raises:
        TypeError: If ``source`` does not support the buffer protocol, or is
            not C-contiguous.
    """
    if isinstance(source, str):
        source = source.encode(get_default_encoding())
    view = memoryview(source)
    if view.ndim != 1 or view.format != "B":
        view = view.cast("B")
    return view.toreadonly()


def _triple(source: Needle) -> tuple[memoryview, int, int]:
    """Resolve any accepted argument to ``(base, offset, length)``."""
    if isinstance(source, StringView):
        return source._base, source._offset, source._length  # pylint: disable=protected-access
    if isinstance(source, int):
        return memoryview(bytes((source,))), 0, 1
    base = _export(source)
    return base, 0, base.nbytes


def _check_count(name: str, value: int) -> None:
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")


@total_ordering
class StringView:
    """A ``(base, offset, length)`` window into storage the view does not own.

    Args:
        source: The storage to view. ``None`` gives the empty view; another
            `StringView` makes ``offset``/``length`` relative to that view.
        offset: Start of the window within ``source``.
        length: Number of bytes in the window; ``None`` runs to the end.

    Raises:
        InvalidSpanError: If the window does not lie inside ``source``.
        TypeError: If ``source`` is not a str, a view or a buffer, or if
            ``offset``/``length`` are given without a ``source``.
    """

    __slots__ = ("_base", "_offset", "_length")

    npos = NPOS

    def __init__(
        self, source: ViewSource | None = None, offset: int = 0, length: int | None = None
    ) -> None:
        if source is None:
            if offset or length:
                raise TypeError("the empty view takes no offset or length")
            base, start, capacity = _EMPTY, 0, 0
        elif isinstance(source, int):
            raise TypeError("StringView cannot be built from an int")
        else:
            base, start, capacity = _triple(source)
        if length is None:
            length = capacity - offset
        if offset < 0 or length < 0 or offset + length > capacity:
            logger.debug(
                "Rejecting span offset=%s length=%s over %s bytes",
                offset,
                length,
                capacity,
            )
            raise InvalidSpanError(offset, length, capacity)
        self._base = base
        self._offset = start + offset
        self._length = length

    # --- Alternate constructors ---

    @classmethod
    def _from_parts(cls, base: memoryview, offset: int, length: int) -> Self:
        view = cls.__new__(cls)
        view._base = base
        view._offset = offset
        view._length = length
        return view

    @classmethod
    def from_string(cls, source: ViewSource) -> Self:
        """Capture the current contents of an owned string-like source."""
        return cls(source)

    @classmethod
    def from_cstring(cls, source: ViewSource, offset: int = 0) -> Self:
        """View the null-terminated string starting at ``offset`` in ``source``.

        The length is found by scanning for the first ``b"\\0"``, so
        construction costs O(length). The terminator itself is not part of
        the view.

        Raises:
            TypeError: If ``source`` is ``None`` or not a buffer.
            InvalidSpanError: If ``offset`` lies outside ``source``.
            UnterminatedStringError: If no terminator follows ``offset``.
        """
        if source is None:
            raise TypeError("from_cstring() requires a buffer, not None")
        base, start, capacity = _triple(source)
        if not 0 <= offset <= capacity:
            raise InvalidSpanError(offset, 0, capacity)
        first = start + offset
        last = start + capacity
        end = first
        while end < last and base[end] != 0:
            end += 1
        if end == last:
            logger.debug("No terminator after offset %s in %s bytes", offset, capacity)
            raise UnterminatedStringError(offset)
        return cls._from_parts(base, first, end - first)

    # --- Capacity ---

    def size(self) -> int:
        """Return the number of bytes in the view."""
        return self._length

    def __len__(self) -> int:
        return self._length

    def empty(self) -> bool:
        """Return True if the view has no bytes."""
        return self._length == 0

    def __bool__(self) -> bool:
        return self._length != 0

    # --- Element access ---

    def __getitem__(self, key: int | slice) -> Any:
        if isinstance(key, slice):
            if key.step not in (None, 1):
                raise TypeError("StringView does not support step when slicing")
            start, stop, _ = key.indices(self._length)
            return self._from_parts(self._base, self._offset + start, max(0, stop - start))
        index = key + self._length if key < 0 else key
        if not 0 <= index < self._length:
            raise IndexError("StringView index out of range")
        return self._base[self._offset + index]

    def at(self, pos: int) -> int:
        """Return the byte at ``pos``.

        Raises:
            ViewOutOfRangeError: If ``pos`` is not in ``[0, size())``.
        """
        if not 0 <= pos < self._length:
            raise ViewOutOfRangeError("at", pos, self._length)
        return self._base[self._offset + pos]

    def front(self) -> int:
        """Return the first byte; raises IndexError on an empty view."""
        if not self._length:
            raise IndexError("front() called on an empty StringView")
        return self._base[self._offset]

    def back(self) -> int:
        """Return the last byte; raises IndexError on an empty view."""
        if not self._length:
            raise IndexError("back() called on an empty StringView")
        return self._base[self._offset + self._length - 1]

    def data(self) -> memoryview:
        """Return a read-only memoryview of exactly `size` bytes.

        The range is not null-terminated.
        """
        return self._base[self._offset : self._offset + self._length]

    def __iter__(self) -> Iterator[int]:
        base = self._base
        for i in range(self._offset, self._offset + self._length):
            yield base[i]

    def __reversed__(self) -> Iterator[int]:
        base = self._base
        for i in range(self._offset + self._length - 1, self._offset - 1, -1):
            yield base[i]

    # --- Modifiers (of the view, never of the referenced bytes) ---

    def clear(self) -> None:
        """Make the view empty without moving its start."""
        self._length = 0

    def remove_prefix(self, n: int) -> None:
        """Drop the first ``n`` bytes; ``n`` larger than the view empties it."""
        _check_count("n", n)
        n = min(n, self._length)
        self._offset += n
        self._length -= n

    def remove_suffix(self, n: int) -> None:
        """Drop the last ``n`` bytes; ``n`` larger than the view empties it."""
        _check_count("n", n)
        self._length -= min(n, self._length)

    def swap(self, other: StringView) -> None:
        """Exchange the windows of two views."""
        if not isinstance(other, StringView):
            raise TypeError(f"cannot swap StringView with {type(other).__name__}")
        self._base, other._base = other._base, self._base
        self._offset, other._offset = other._offset, self._offset
        self._length, other._length = other._length, self._length

    # --- String operations ---

    def substr(self, pos: int, n: int | None = None) -> Self:
        """Return the sub-view starting at ``pos`` of at most ``n`` bytes.

        Args:
            pos: Start of the sub-view; ``pos == size()`` yields an empty view.
            n: Maximum length. ``None`` or `NPOS` (and any ``n`` running past
                the end) select the rest of the view.

        Returns:
            A new view over the same storage.

        Raises:
            ViewOutOfRangeError: If ``pos`` is negative or greater than `size`.
            ValueError: If ``n`` is negative and not `NPOS`.
        """
        if not 0 <= pos <= self._length:
            raise ViewOutOfRangeError("substr", pos, self._length)
        rest = self._length - pos
        if n is None or n == NPOS:
            n = rest
        else:
            _check_count("n", n)
            n = min(n, rest)
        return self._from_parts(self._base, self._offset + pos, n)

    def starts_with(self, prefix: Needle) -> bool:
        """Return True if the view begins with ``prefix``.

        ``prefix`` may be a single byte value, a str, a buffer or a view. An
        empty prefix always matches.
        """
        base, offset, length = _triple(prefix)
        return (
            self._length >= length
            and compare(self._base, self._offset, base, offset, length) == 0
        )

    def ends_with(self, suffix: Needle) -> bool:
        """Return True if the view ends with ``suffix``; see `starts_with`."""
        base, offset, length = _triple(suffix)
        return (
            self._length >= length
            and compare(
                self._base, self._offset + self._length - length, base, offset, length
            )
            == 0
        )

    def find(self, needle: Needle, pos: int = 0, n: int | None = None) -> int:
        """Return the lowest offset ``>= pos`` at which ``needle`` occurs.

        Args:
            needle: A single byte value, a str, a buffer or a view.
            pos: Offset at which the scan starts.
            n: Use only the first ``n`` bytes of ``needle``.

        Returns:
            int: The offset of the match, ``pos`` for an empty needle, or
            `NPOS` if there is no match or ``pos`` is past the end.

        Raises:
            ValueError: If ``pos`` is negative.
            InvalidSpanError: If ``n`` exceeds the length of ``needle``.
        """
        _check_count("pos", pos)
        base, offset, length = _triple(needle)
        if n is not None:
            if not 0 <= n <= length:
                raise InvalidSpanError(0, n, length)
            length = n
        if pos > self._length:
            return NPOS
        if not length:
            return pos
        last = self._offset + self._length
        hit = naive_search(
            self._base, self._offset + pos, last, base, offset, offset + length
        )
        return NPOS if hit == last else hit - self._offset

    def __contains__(self, needle: Needle) -> bool:
        return self.find(needle) != NPOS

    # --- Comparison ---

    def __eq__(self, other: object) -> bool:
        """Byte-wise equality with views, bytes-like objects and ``str``.

        A ``str`` operand is encoded with the configured encoding first, so
        comparing with one can raise `strview.config.UnknownEncodingError`
        (bad ``STRVIEW_ENCODING``) or ``UnicodeEncodeError``. Integers and
        other objects compare unequal.
        """
        if isinstance(other, int):
            return NotImplemented
        try:
            base, offset, length = _triple(other)  # type: ignore[arg-type]
        except TypeError:
            return NotImplemented
        return (
            self._length == length
            and compare(self._base, self._offset, base, offset, length) == 0
        )

    def __lt__(self, other: object) -> bool:
        """Unsigned byte-wise order; ``str`` operands behave as in `__eq__`."""
        if isinstance(other, int):
            return NotImplemented
        try:
            base, offset, length = _triple(other)  # type: ignore[arg-type]
        except TypeError:
            return NotImplemented
        order = compare(self._base, self._offset, base, offset, min(self._length, length))
        if order:
            return order < 0
        return self._length < length

    __hash__ = None  # type: ignore[assignment]

    # --- Output and conversion ---

    def write_to(self, sink: IO[bytes]) -> IO[bytes]:
        """Write the raw bytes of the view to ``sink`` and return the sink."""
        sink.write(self.data())
        return sink

    def to_string(self) -> bytes:
        """Return an owned copy of the referenced bytes."""
        return bytes(self.data())

    __bytes__ = to_string

    def to_bytearray(self) -> bytearray:
        """Return a mutable owned copy of the referenced bytes."""
        return bytearray(self.data())

    def decode(self, encoding: str | None = None, errors: str = "strict") -> str:
        """Decode the referenced bytes, by default with the configured encoding."""
        return self.to_string().decode(encoding or get_default_encoding(), errors)

    def copy(self) -> Self:
        """Return a second view over the same window."""
        return self._from_parts(self._base, self._offset, self._length)

    __copy__ = copy

    def __deepcopy__(self, memo: dict[int, Any]) -> Self:
        return self.copy()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_string()!r})"
