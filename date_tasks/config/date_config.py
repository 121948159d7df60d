#!filepath: date_tasks/config/date_config.py
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
from pydantic import BaseModel, field_validator


class DateConfig(BaseModel):
    # IANA name used for "local" calendar fields and offset-less input
    local_timezone: str = "UTC"

    @field_validator("local_timezone")
    @classmethod
    def _known_zone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"unknown timezone: {v!r}") from e
        return v
