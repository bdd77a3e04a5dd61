"""CLI helpers for strview.

Utilities used by the command-line interface: NAME=LEVEL parsing for logger
overrides and message emitters that write to stderr with emoji→ASCII
fallbacks.
"""

from .log_level_parser import parse_log_level
from .messages import warn

__all__ = ["parse_log_level", "warn"]
