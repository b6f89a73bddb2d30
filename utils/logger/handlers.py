"""日志处理器工厂模块"""

import logging
import sys
import threading
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Dict, Optional

from .config import LogConfig
from .formatters import ColoredFormatter, SecurityFormatter


class HandlerFactory:
    """日志处理器工厂（统一登记，便于退出时关闭）"""
    _handlers: Dict[int, logging.Handler] = {}
    _lock = threading.RLock()

    @classmethod
    def _ensure_log_dir(cls, target_dir: Optional[Path] = None) -> Path:
        log_dir = Path(target_dir or LogConfig.log_dir()).resolve()
        try:
            log_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise RuntimeError(f"Log directory initialization failed: {e} (path: {log_dir})") from e
        return log_dir

    @classmethod
    def create_handler(cls, handler_type: str, level: int, filename: Optional[str] = None, **kwargs) -> logging.Handler:
        """创建日志处理器: "timed" | "console" """
        if handler_type == "timed":
            log_dir = cls._ensure_log_dir()
            history_dir = log_dir / "history"
            history_dir.mkdir(parents=True, exist_ok=True)

            handler = TimedRotatingFileHandler(
                filename=log_dir / (filename or LogConfig.main_log_file()),
                when=kwargs.get("when", "midnight"),
                backupCount=LogConfig.BACKUP_COUNT,
                encoding="utf-8",
                delay=True,
            )
            # 轮转后的文件归档到 history/
            handler.rotation_filename = lambda path: str(history_dir / Path(path).name)
            handler.setFormatter(SecurityFormatter(SecurityFormatter.STANDARD_FORMAT, SecurityFormatter.DATE_FORMAT))
        elif handler_type == "console":
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(ColoredFormatter(SecurityFormatter.STANDARD_FORMAT, SecurityFormatter.DATE_FORMAT))
        else:
            raise ValueError(f"Unknown handler type: {handler_type}")

        handler.setLevel(level)
        with cls._lock:
            cls._handlers[id(handler)] = handler
        return handler

    @classmethod
    def release(cls, handler: logging.Handler) -> None:
        """关闭并注销单个处理器"""
        with cls._lock:
            cls._handlers.pop(id(handler), None)
        try:
            handler.flush()
            handler.close()
        except (OSError, ValueError):
            pass

    @classmethod
    def cleanup(cls) -> None:
        """关闭所有已登记的处理器"""
        with cls._lock:
            for handler in cls._handlers.values():
                try:
                    handler.flush()
                    handler.close()
                except (OSError, ValueError):
                    pass
            cls._handlers.clear()
