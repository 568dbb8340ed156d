"""Helpers for the eqcontract CLI.

Class reference parsing for command arguments, logger-level option parsing
and status-line emitters that write to stderr with emoji/ASCII fallbacks.
"""

from .log_level_parser import parse_log_level
from .messages import error, success, warn
from .targets import ClassReference

__all__ = ["ClassReference", "error", "parse_log_level", "success", "warn"]
