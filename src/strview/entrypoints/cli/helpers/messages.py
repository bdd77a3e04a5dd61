"""Terminal message helpers for the strview CLI.

Small helpers for rendering user-visible lines with sensible emoji→ASCII fallbacks.
Messages write to stderr by default so stdout can remain machine-readable.
"""

import click


def _supports_character(character: str) -> bool:
    """Return True if *character* can be encoded on stderr.

    Args:
        character: A single Unicode character to check (e.g., "⚠️").

    Returns:
        bool: True if encoding succeeds; False on `UnicodeEncodeError`.
    """

    stream = click.get_text_stream("stderr")  # pragma: no mutate
    encoding = getattr(stream, "encoding", None) or "ascii"
    try:
        character.encode(encoding)
    except UnicodeEncodeError:
        return False
    return True


def _glyph(emoji: str, fallback: str) -> str:
    return emoji if _supports_character(emoji) else fallback


def caution_glyph() -> str:
    """Warning marker: "⚠️" when the stream supports it, otherwise "[!]"."""
    return _glyph("⚠️", "[!]")  # pragma: no mutate


def warn(msg: str) -> None:
    """Emit a yellow, bold warning line to **stderr** with a caution glyph.

    Example:
        ``⚠️  'needle' not found in data.bin``
    """
    click.secho(f"{caution_glyph()}  {msg}", fg="yellow", bold=True, err=True)
