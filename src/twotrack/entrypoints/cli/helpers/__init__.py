"""Small, pure helpers shared by the CLI commands."""

from .hyperlinks import hyperlink, supports_osc8
from .log_level_parser import parse_log_level
from .messages import error, success, warn

__all__ = ["error", "hyperlink", "parse_log_level", "success", "supports_osc8", "warn"]
