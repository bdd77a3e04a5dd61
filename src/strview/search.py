"""Byte-run comparison and naive substring search.

Both helpers work on flat byte ``memoryview`` objects addressed by absolute
offsets, so callers can scan a window of a larger buffer without slicing it.
Neither function allocates.
"""

from __future__ import annotations


def compare(a: memoryview, a_off: int, b: memoryview, b_off: int, count: int) -> int:
    """Compare ``count`` bytes of ``a`` and ``b`` as unsigned values.

    Args:
        a: First buffer.
        a_off: Offset of the first byte to compare in ``a``.
        b: Second buffer.
        b_off: Offset of the first byte to compare in ``b``.
        count: Number of bytes to compare.

    Returns:
        int: ``-1`` if the run in ``a`` sorts first, ``1`` if the run in ``b``
        sorts first, ``0`` if the runs are identical.
    """
    for k in range(count):
        x = a[a_off + k]
        y = b[b_off + k]
        if x != y:
            return -1 if x < y else 1
    return 0


def naive_search(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    haystack: memoryview,
    first: int,
    last: int,
    needle: memoryview,
    s_first: int,
    s_last: int,
) -> int:
    """Find the first occurrence of ``needle[s_first:s_last]`` in ``haystack[first:last]``.

    Every candidate start from ``first`` up to ``last - len(needle)`` is
    checked byte by byte, and the leftmost complete match wins. Matches may
    overlap the region scanned by an earlier call.

    Returns:
        int: Absolute offset in ``haystack`` of the match, or ``last`` if the
        needle does not occur. An empty needle matches at ``first``.
    """
    n = s_last - s_first
    for start in range(first, last - n + 1):
        for k in range(n):
            if haystack[start + k] != needle[s_first + k]:
                break
        else:
            return start
    return last
