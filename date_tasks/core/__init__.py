# date_tasks/core/__init__.py
from .instant import (
    Instant,
    DateFields,
    UTC,
    set_local_timezone,
    get_local_timezone,
)

__all__ = [
    "Instant",
    "DateFields",
    "UTC",
    "set_local_timezone",
    "get_local_timezone",
]
