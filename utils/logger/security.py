"""日志脱敏"""

import re
from functools import lru_cache
from typing import Any

_PATTERNS = [
    (re.compile(r'(?i)("password"\s*:\s*")[^"]+(")'), r'\1******\2'),
    (re.compile(r'(?i)(password=)[^&\s]+'), r'\1******'),
    (re.compile(r'(?i)(token=)[^&\s]+'), r'\1******'),
    (re.compile(r'(?i)(api_?key=)[^&\s]+'), r'\1******'),
    # 联系表单会填写邮箱，日志中只保留域名
    (re.compile(r'([a-zA-Z0-9._%+-]+)@([a-zA-Z0-9.-]+\.[a-zA-Z]{2,})'), r'***@\2'),
]


@lru_cache(maxsize=256)
def _mask_cached(text: str) -> str:
    for pattern, repl in _PATTERNS:
        text = pattern.sub(repl, text)
    return text


def mask_sensitive_data(message: Any) -> Any:
    """敏感信息脱敏（非字符串原样返回）"""
    if not isinstance(message, str) or not message:
        return message
    return _mask_cached(message)


def clear_cache() -> None:
    _mask_cached.cache_clear()
