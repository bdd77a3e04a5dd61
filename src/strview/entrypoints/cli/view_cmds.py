"""strview view commands.

Each command reads FILE once, wraps its bytes in a `StringView`, and performs
a single view operation on it. Derived views share the file's bytes; only the
``slice`` command copies anything, and only into the output stream.

Behavior
- Results go to **stdout** (offsets and booleans as text, slices as raw
  bytes) so the commands compose in pipelines; notices go to **stderr**.
- Text arguments are encoded with the configured encoding
  (``STRVIEW_ENCODING``); ``--hex`` takes the argument as hex digits instead.
- At INFO each command logs the byte window of FILE it answered from, shown
  as ``[start:end]`` (see `strview.logging.WindowTagFilter`).

Exit codes
- ``0`` on success / true / found.
- ``1`` when a test is false or a needle is not found, and for reported
  failures (out-of-range positions, unterminated strings, unreadable files),
  which are raised as ``ClickException`` after dumping the flight recorder.
- ``2`` for arguments that are not valid hex or cannot be encoded.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import click
import click_extra as clickx

from strview.config import get_default_encoding
from strview.errors import StringViewError
from strview.logging import dump_flight_recorder
from strview.view import NPOS, StringView

from .helpers import warn

logger = logging.getLogger(__name__)

FILE_ARGUMENT = click.argument(
    "file", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
HEX_OPTION = click.option(
    "--hex",
    "as_hex",
    is_flag=True,
    help="Interpret the text argument as hexadecimal bytes (e.g. '00ff').",
)


@contextmanager
def _reported(operation: str) -> Iterator[None]:
    """Turn view and I/O failures into a ``ClickException``."""
    try:
        yield
    except (StringViewError, OSError) as e:
        logger.debug("%s failed: %s", operation, e)
        dump_flight_recorder()
        raise click.ClickException(str(e)) from e


def _load(path: Path) -> StringView:
    with _reported("read"):
        data = path.read_bytes()
    logger.debug("Loaded %s", path, extra={"window": (0, len(data))})
    return StringView(data)


def _argument_bytes(text: str, as_hex: bool) -> StringView:
    if as_hex:
        try:
            return StringView(bytes.fromhex(text))
        except ValueError as e:
            raise click.BadParameter(f"{text!r} is not valid hex.") from e
    try:
        return StringView(text)
    except UnicodeEncodeError as e:
        raise click.BadParameter(
            f"{text!r} cannot be encoded as {get_default_encoding()}."
        ) from e


def _answer(ctx: click.Context, result: bool) -> None:
    click.echo("true" if result else "false")
    if not result:
        ctx.exit(1)


@click.command()
@click.argument("needle")
@FILE_ARGUMENT
@click.option(
    "--pos",
    type=click.IntRange(min=0),
    default=0,
    show_default=True,
    help="Offset at which the search starts.",
)
@HEX_OPTION
@clickx.pass_context
def find(ctx: click.Context, needle: str, file: Path, pos: int, as_hex: bool) -> None:
    """Print the offset of the first NEEDLE in FILE at or after --pos."""
    view = _load(file)
    target = _argument_bytes(needle, as_hex)
    offset = view.find(target, pos)
    click.echo(offset)
    if offset == NPOS:
        logger.info("find %r from %d: no match", needle, pos)
        warn(f"{needle!r} not found in {file}")
        ctx.exit(1)
    logger.info(
        "find %r from %d", needle, pos, extra={"window": (offset, target.size())}
    )


@click.command(name="slice")
@FILE_ARGUMENT
@click.argument("pos", type=click.IntRange(min=0))
@click.argument("count", type=click.IntRange(min=0), required=False)
def slice_(file: Path, pos: int, count: int | None) -> None:
    """Write COUNT bytes of FILE starting at POS to stdout.

    Without COUNT, or when COUNT runs past the end, the rest of the file is
    written. POS may equal the file size (nothing is written) but not exceed it.
    """
    view = _load(file)
    with _reported("slice"):
        part = view.substr(pos, count)
    logger.info("slice %s", file, extra={"window": (pos, part.size())})
    part.write_to(click.get_binary_stream("stdout")).flush()


@click.command(name="starts-with")
@click.argument("prefix")
@FILE_ARGUMENT
@HEX_OPTION
@clickx.pass_context
def starts_with(ctx: click.Context, prefix: str, file: Path, as_hex: bool) -> None:
    """Print whether FILE begins with PREFIX."""
    view = _load(file)
    head = _argument_bytes(prefix, as_hex)
    result = view.starts_with(head)
    logger.info(
        "starts-with %r: %s",
        prefix,
        result,
        extra={"window": (0, min(head.size(), view.size()))},
    )
    _answer(ctx, result)


@click.command(name="ends-with")
@click.argument("suffix")
@FILE_ARGUMENT
@HEX_OPTION
@clickx.pass_context
def ends_with(ctx: click.Context, suffix: str, file: Path, as_hex: bool) -> None:
    """Print whether FILE ends with SUFFIX."""
    view = _load(file)
    tail = _argument_bytes(suffix, as_hex)
    result = view.ends_with(tail)
    width = min(tail.size(), view.size())
    logger.info(
        "ends-with %r: %s",
        suffix,
        result,
        extra={"window": (view.size() - width, width)},
    )
    _answer(ctx, result)


@click.command()
@FILE_ARGUMENT
@click.option(
    "--offset",
    type=click.IntRange(min=0),
    default=0,
    show_default=True,
    help="Offset of the first byte of the string.",
)
def cstr(file: Path, offset: int) -> None:
    """Print the length of the null-terminated string at --offset in FILE."""
    view = _load(file)
    with _reported("cstr"):
        text = StringView.from_cstring(view, offset)
    logger.info("cstr %s", file, extra={"window": (offset, text.size())})
    click.echo(text.size())
