"""步骤与耗时日志组件"""

import logging
import time
from contextlib import contextmanager
from functools import wraps
from typing import Callable, Optional

_default_logger = logging.getLogger("automation")


def log_step(step_name: str, logger_param: Optional[logging.Logger] = None) -> Callable:
    """记录步骤开始/完成/失败；异常原样抛出"""
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            log = logger_param or _default_logger
            log.info("Step: %s", step_name)
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                log.error("Failed: %s | %s: %s", step_name, type(e).__name__, e)
                raise
            log.info("Completed: %s", step_name)
            return result
        return wrapper
    return decorator


@contextmanager
def log_duration(step_name: str, logger_param: Optional[logging.Logger] = None, threshold_ms: float = 1000.0):
    """执行时间跟踪"""
    log = logger_param or _default_logger
    start = time.perf_counter()
    log.debug("START %s", step_name)
    try:
        yield
    finally:
        duration_ms = (time.perf_counter() - start) * 1000
        msg = f"END {step_name} {duration_ms:.2f}ms"
        if duration_ms >= threshold_ms:
            msg += " SLOW"
        log.debug(msg)
