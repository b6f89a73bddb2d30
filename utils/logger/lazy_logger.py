"""延迟初始化日志实例模块"""

import logging
import threading
from datetime import datetime, timezone
from typing import Any, Dict

_instances: Dict[str, logging.Logger] = {}
_options: Dict[str, Dict[str, Any]] = {}
_lock = threading.Lock()


class LazyLogger:
    """按名称缓存日志实例，首次获取时才挂载处理器"""

    @classmethod
    def get(cls, name: str, **kwargs) -> logging.Logger:
        with _lock:
            if name not in _instances:
                _instances[name] = cls._build(name, kwargs)
                _options[name] = kwargs
        return _instances[name]

    @classmethod
    def rebuild(cls, name: str) -> logging.Logger:
        """按当前 settings 重新设置级别并重建处理器（沿用首次创建时的参数）"""
        with _lock:
            kwargs = dict(_options.get(name, {}), banner=False)
            _instances[name] = cls._build(name, kwargs)
            _options.setdefault(name, {})
        return _instances[name]

    @staticmethod
    def _build(name: str, kwargs: Dict[str, Any]) -> logging.Logger:
        from .config import LogConfig
        from .handlers import HandlerFactory

        logger = logging.getLogger(name)
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
            HandlerFactory.release(handler)

        level = getattr(logging, (kwargs.get('log_level') or LogConfig.log_level()).upper(), logging.INFO)
        logger.setLevel(level)
        logger.propagate = kwargs.get('propagate', False)

        if kwargs.get('log_to_console', True):
            logger.addHandler(HandlerFactory.create_handler("console", logging.DEBUG))
        if kwargs.get('log_to_file', True):
            logger.addHandler(HandlerFactory.create_handler(
                "timed", logging.DEBUG, kwargs.get('separate_log_file')
            ))

        if name == "automation" and kwargs.get('banner', True) and not LogConfig.QUIET:
            logger.info("=" * 70)
            logger.info(f"Portfolio UI suite | Env: {LogConfig.env()} | Level: {logging.getLevelName(level)}")
            logger.info(f"UTC: {datetime.now(timezone.utc).isoformat()}")
            logger.info("=" * 70)
        return logger

    @classmethod
    def cleanup(cls) -> None:
        with _lock:
            _instances.clear()
            _options.clear()
