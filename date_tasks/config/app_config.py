#!filepath: date_tasks/config/app_config.py
import yaml
from pydantic import BaseModel
from dotenv import load_dotenv
import os

from .log_config import LogConfig
from .date_config import DateConfig
from date_tasks.core.instant import set_local_timezone
from date_tasks.utils.logger import logs, init_logging

TZ_ENV = "DATE_TASKS_TZ"


def project_root() -> str:
    """
    Project root, derived from this file's location:
    date_tasks/config/app_config.py -> date_tasks/config -> date_tasks -> project_root
    """
    return os.path.abspath(os.path.join(os.path.dirname(__file__), "../../"))


def default_config_path() -> str:
    return os.path.join(os.path.dirname(os.path.abspath(__file__)), "base.yml")


class AppConfig(BaseModel):
    log: LogConfig
    date: DateConfig

    @classmethod
    def load(cls, path: str | None = None) -> "AppConfig":
        """
        Load YAML config + .env
        - defaults to date_tasks/config/base.yml
        - independent of the current working directory
        - DATE_TASKS_TZ overrides date.local_timezone
        """
        root = project_root()

        # 1) .env in the project root
        load_dotenv(os.path.join(root, ".env"))

        # 2) config file path
        if path is None:
            path = default_config_path()

        if not os.path.exists(path):
            raise FileNotFoundError(f"Config file not found: {path}")

        # 3) YAML
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        # 4) env override
        tz = os.getenv(TZ_ENV)
        if tz:
            raw.setdefault("date", {})
            raw["date"]["local_timezone"] = tz

        return cls(**raw)

    def apply(self, with_logging: bool = False) -> "AppConfig":
        """
        Push the date section into the date utilities (and optionally the log section into loguru).
        """
        if with_logging:
            init_logging(self.log)
        set_local_timezone(self.date.local_timezone)
        logs.debug(f"[AppConfig] local timezone = {self.date.local_timezone}")
        return self
