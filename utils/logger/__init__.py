"""测试框架日志系统"""

import atexit
import logging
from typing import Optional

from .components import log_duration, log_step
from .config import LogConfig
from .handlers import HandlerFactory
from .lazy_logger import LazyLogger
from .security import clear_cache, mask_sensitive_data

__all__ = [
    "logger", "setup_logger", "reconfigure", "log_step", "log_duration",
    "mask_sensitive_data", "LazyLogger", "LogConfig", "HandlerFactory", "cleanup",
]


def setup_logger(
    name: str = "automation",
    log_level: Optional[str] = None,
    log_to_console: bool = True,
    log_to_file: bool = True,
    separate_log_file: Optional[str] = None,
) -> logging.Logger:
    """
    获取（或创建）日志器

    标准格式:
        2026-02-15 00:30:45 INFO     [home_page.py:toggle_theme:42] Toggling theme
    """
    return LazyLogger.get(
        name,
        log_level=log_level,
        log_to_console=log_to_console,
        log_to_file=log_to_file,
        separate_log_file=separate_log_file,
    )


def reconfigure(name: str = "automation") -> logging.Logger:
    """settings 变更（如 --config-overrides）后按新的级别、目录与文件名重建日志器"""
    return LazyLogger.rebuild(name)


def cleanup() -> None:
    """全局清理函数"""
    LazyLogger.cleanup()
    HandlerFactory.cleanup()
    clear_cache()


atexit.register(cleanup)

logger = setup_logger("automation")
