#!filepath: date_tasks/__init__.py

from .utils.logger import Logging, logs
from .utils.errors import ParseError, UserInputError
from .core.instant import Instant
from .utils.datetime_utils import (
    DateTimeUtils,
    parse_from_rfc2822,
    parse_from_iso8601,
    is_leap_year,
    format_time_span,
    clock_hand_angle,
)
from .config.app_config import AppConfig

__version__ = "0.1.0"

# alias
datetime_utils = DateTimeUtils

__all__ = [
    "logs", "Logging",
    "ParseError", "UserInputError",
    "Instant",
    "datetime_utils",
    "parse_from_rfc2822",
    "parse_from_iso8601",
    "is_leap_year",
    "format_time_span",
    "clock_hand_angle",
    "AppConfig",
]
