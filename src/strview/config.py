"""Configuration utilities for strview.

This module centralizes small helpers and constants related to configuration.
"""

import codecs
import os

DEFAULT_ENCODING = "utf-8"  # pragma: no mutate
ENCODING_ENV_VAR = "STRVIEW_ENCODING"  # pragma: no mutate


class UnknownEncodingError(Exception):
    """Raised when STRVIEW_ENCODING names a codec Python does not know."""

    def __init__(self, encoding: str) -> None:
        super().__init__(f"Unknown encoding {encoding!r} in {ENCODING_ENV_VAR}.")
        self.encoding = encoding


def get_default_encoding() -> str:
    """Get the encoding used to turn ``str`` sources into bytes.

    Returns:
        The canonical codec name from `STRVIEW_ENCODING`, or ``"utf-8"``
        when the variable is unset or empty.

    Raises:
        UnknownEncodingError: If `STRVIEW_ENCODING` is not a known codec.
    """
    if not (name := os.environ.get(ENCODING_ENV_VAR)):
        return DEFAULT_ENCODING
    try:
        return codecs.lookup(name).name
    except LookupError as e:
        raise UnknownEncodingError(name) from e
