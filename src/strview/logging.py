"""Logging setup for the strview CLI.

Two handlers share the root logger:

- the console handler (Rich, on stderr) shows records at the verbosity picked
  with ``-v``/``-q``;
- the flight recorder buffers every record at DEBUG and writes the buffer to
  the log file only when a WARNING or worse is logged or a view operation
  fails, so a failed run leaves its full trace behind and a clean run leaves
  nothing.

View operations log the byte window they touched by passing
``extra={"window": (start, length)}``. `WindowTagFilter` renders it as
``[start:end]`` in both outputs.

Library modules only emit records through ``logging.getLogger(__name__)``;
handlers are attached solely by `setup_logging`.
"""

from __future__ import annotations

import logging
import platform
from logging.handlers import MemoryHandler
from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from logging import Handler, Logger

PACKAGE = "strview"

# A full buffer is written out as well; a single run stays far below this.
RECORDER_CAPACITY = 10_000

CONSOLE_FORMAT = "%(tag)s %(message)s"
DEBUG_CONSOLE_FORMAT = "%(name)s %(tag)s %(message)s"
RECORDER_FORMAT = (
    "[%(asctime)s] %(levelname)-8s %(name)s:%(lineno)d %(tag)s %(message)s"
)


class WindowTagFilter(logging.Filter):  # pylint: disable=too-few-public-methods
    """Set ``record.tag`` for the formatters above.

    Records carrying a ``window`` extra are tagged ``[start:end]``; records
    from loggers outside the package are tagged with their top-level name
    (``some.lib.module`` gives ``[some]``); all others get an empty tag.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        window = getattr(record, "window", None)
        top = record.name.split(".", 1)[0]
        if window is not None:
            start, length = window
            record.tag = f"[{start}:{start + length}]"
        elif top != PACKAGE:
            record.tag = f"[{top}]"
        else:
            record.tag = ""
        return True


def console_handler(
    level: int, *, debug: bool = False, color: bool = True
) -> RichHandler:
    """Return a Rich handler on stderr.

    ``debug`` lowers the threshold to DEBUG and adds timestamps, logger names
    and source locations. ``color=False`` turns styling off entirely, in line
    with click-extra's ``--no-color``.
    """
    handler = RichHandler(
        level=logging.DEBUG if debug else level,
        console=Console(stderr=True, color_system="auto" if color else None),
        rich_tracebacks=True,
        show_time=debug,
        show_path=debug,
        enable_link_path=debug,
    )
    handler.setFormatter(
        logging.Formatter(DEBUG_CONSOLE_FORMAT if debug else CONSOLE_FORMAT)
    )
    handler.addFilter(WindowTagFilter())
    return handler


def flight_recorder(path: Path) -> MemoryHandler:
    """Return a DEBUG buffer that is written to ``path`` on WARNING.

    The file is opened on the first write, so a run that never warns does
    not create or truncate it. Records still buffered when the handler is
    closed are dropped.
    """
    target = logging.FileHandler(path, mode="w", encoding="utf-8", delay=True)
    target.setFormatter(logging.Formatter(RECORDER_FORMAT))
    recorder = MemoryHandler(
        RECORDER_CAPACITY,
        flushLevel=logging.WARNING,
        target=target,
        flushOnClose=False,
    )
    recorder.addFilter(WindowTagFilter())
    return recorder


def dump_flight_recorder() -> None:
    """Write whatever the flight recorder holds now.

    Used when an operation fails with a reported error, which is printed by
    Click rather than logged, so the WARNING trigger never fires.
    """
    for handler in logging.getLogger().handlers:
        if isinstance(handler, MemoryHandler):
            handler.flush()


def setup_logging(
    *,
    level: int,
    debug: bool,
    color: bool,
    recorder_path: Path | None,
    logger_levels: dict[str, int],
) -> list[Handler]:
    """Attach the console handler and, unless disabled, the flight recorder.

    The root logger passes everything through; each handler filters by its
    own level. ``logger_levels`` then raises or lowers individual loggers,
    which affects both handlers.
    """
    handlers: list[Handler] = [console_handler(level, debug=debug, color=color)]
    if recorder_path is not None:
        handlers.append(flight_recorder(recorder_path))
    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)
    for name, lvl in logger_levels.items():
        logging.getLogger(name).setLevel(lvl)
    return handlers


def log_startup(  # pylint: disable=too-many-arguments
    logger: Logger,
    *,
    version: str,
    console_level: int,
    encoding: str,
    recorder_path: Path | None,
    handlers: list[Handler],
    logger_levels: dict[str, int],
) -> None:
    """Log a one-line run summary at INFO and diagnostics at DEBUG."""
    logger.info(
        "strview %s - encoding=%s, console=%s, recorder=%s",
        version,
        encoding,
        logging.getLevelName(console_level),
        recorder_path if recorder_path is not None else "off",
    )
    logger.debug(
        "Python %s on %s %s",
        platform.python_version(),
        platform.system(),
        platform.release(),
    )
    logger.debug("Handlers: %s", ", ".join(type(h).__name__ for h in handlers))
    logger.debug(
        "Logger levels: %s",
        {name: logging.getLevelName(lvl) for name, lvl in logger_levels.items()}
        or "<none>",
    )
