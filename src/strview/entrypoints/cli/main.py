"""The ``strview`` command group.

Global options control logging only; the work is done by the view commands
registered at the bottom of this module (see `view_cmds`):

- ``strview find``: offset of the first occurrence of a needle in a file.
- ``strview slice``: write a byte range of a file to stdout.
- ``strview starts-with`` / ``strview ends-with``: prefix and suffix tests.
- ``strview cstr``: length of a null-terminated string inside a file.

The configured text encoding is checked before anything else runs, so a bad
``STRVIEW_ENCODING`` is reported once instead of failing inside a command.

Examples
    $ strview find world greeting.txt
    $ strview -v slice greeting.txt 6 5
"""

import logging
from pathlib import Path

import click
import click_extra as clickx
from platformdirs import user_log_dir

from strview import __version__
from strview.config import UnknownEncodingError, get_default_encoding
from strview.logging import log_startup, setup_logging

from .helpers import parse_log_level
from .view_cmds import cstr, ends_with, find, slice_, starts_with

logger = logging.getLogger(__name__)

DEFAULT_LOG_PATH = (
    Path(user_log_dir("strview", appauthor=False, ensure_exists=True))
    / "last-failure.log"
)


def _console_level(verbose: int, quiet: int) -> int:
    """WARNING, one level lower per -v and one higher per -q."""
    level = logging.WARNING + 10 * (quiet - verbose)
    return min(max(level, logging.DEBUG), logging.CRITICAL)


@clickx.extra_group(
    version=__version__,
    params=[
        clickx.ColorOption(show_envvar=True),
        clickx.TimerOption(show_envvar=True),
        clickx.ExtraVersionOption(),
    ],
)
@click.option("-v", "--verbose", count=True, help="Show more log output (repeatable).")
@click.option("-q", "--quiet", count=True, help="Show less log output (repeatable).")
@click.option(
    "--debug/--no-debug",
    default=False,
    help="Log everything to the console, with logger names and source lines.",
)
@click.option(
    "--log-path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_LOG_PATH,
    envvar="STRVIEW_LOG_PATH",
    show_default=True,
    show_envvar=True,
    help="File the flight recorder writes to when a run fails.",
)
@click.option(
    "--flight-recorder/--no-flight-recorder",
    default=True,
    envvar="STRVIEW_FLIGHT_RECORDER",
    show_envvar=True,
    help=(
        "Buffer DEBUG records in memory and write them to --log-path when a "
        "warning is logged or a view operation fails. Clean runs write nothing."
    ),
)
@click.option(
    "-L",
    "--logger-level",
    "logger_levels",
    multiple=True,
    callback=parse_log_level,
    default=("click_extra=WARNING",),
    envvar="STRVIEW_LOGGER_LEVELS",
    show_default=True,
    show_envvar=True,
    help=(
        "NAME=LEVEL minimum level for one logger, e.g. -L strview.view=DEBUG. "
        "Applies to the console and the flight recorder alike. Repeatable."
    ),
)
@clickx.pass_context
def strview(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    verbose: int,
    quiet: int,
    debug: bool,
    log_path: Path,
    flight_recorder: bool,
    logger_levels: dict[str, int],
) -> None:
    """Inspect files through non-owning byte views.

    Search for substrings, test prefixes and suffixes, and extract byte
    ranges without decoding the data. Text arguments are encoded with
    STRVIEW_ENCODING (default utf-8).
    """
    try:
        encoding = get_default_encoding()
    except UnknownEncodingError as e:
        raise click.ClickException(str(e)) from e

    level = _console_level(verbose, quiet)
    recorder_path = log_path if flight_recorder else None
    handlers = setup_logging(
        level=level,
        debug=debug,
        color=ctx.color is not False,
        recorder_path=recorder_path,
        logger_levels=logger_levels,
    )
    log_startup(
        logger,
        version=__version__,
        console_level=level,
        encoding=encoding,
        recorder_path=recorder_path,
        handlers=handlers,
        logger_levels=logger_levels,
    )
    ctx.call_on_close(logging.shutdown)


for command in (find, slice_, starts_with, ends_with, cstr):
    strview.add_command(command)
