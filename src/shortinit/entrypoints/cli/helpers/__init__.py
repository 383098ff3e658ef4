"""Helpers for the SHORTINIT CLI."""

from .log_level_parser import parse_log_level
from .messages import boot_glyph, error, success, warn

__all__ = ["boot_glyph", "error", "parse_log_level", "success", "warn"]
