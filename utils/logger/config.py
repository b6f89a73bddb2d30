"""日志配置模块"""

import os
from pathlib import Path

from config import settings


class LogConfig:
    """
    日志配置：目录、级别、文件名与环境在每次取值时读取 settings，
    --config-overrides 之后重建的处理器即可生效；其余为进程级开关
    """
    BACKUP_COUNT: int = 7
    ENABLE_COLORS: bool = os.getenv("LOG_COLORS", "false").lower() in ("true", "1", "yes")
    QUIET: bool = os.getenv("LOG_QUIET", "false").lower() in ("true", "1", "yes")

    @staticmethod
    def log_dir() -> Path:
        return Path(settings.log.log_dir)

    @staticmethod
    def log_level() -> str:
        return settings.log.log_level

    @staticmethod
    def main_log_file() -> str:
        return settings.log.log_file

    @staticmethod
    def env() -> str:
        return settings.env
