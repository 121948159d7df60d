from .app_config import AppConfig
from .date_config import DateConfig
from .log_config import LogConfig

__all__ = ["AppConfig", "DateConfig", "LogConfig"]
