"""日志格式化器模块"""

import logging
import re

from .config import LogConfig
from .security import mask_sensitive_data


class SecurityFormatter(logging.Formatter):
    """统一日志格式：时间 级别 [文件:函数:行号] 消息"""
    _CRLF_PATTERN = re.compile(r'[\r\n\x9b]')
    _ANSI_ESCAPE = re.compile(r'\x1b(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])')

    STANDARD_FORMAT = "%(asctime)s %(levelname)-8s [%(filename)s:%(funcName)s:%(lineno)d] %(message)s"
    DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

    def format(self, record: logging.LogRecord) -> str:
        # 复制一份，避免影响同一 record 的其它 handler
        safe = logging.makeLogRecord(record.__dict__)
        safe.msg = self._sanitize(mask_sensitive_data(record.getMessage()))
        safe.args = None
        return super().format(safe)

    @classmethod
    def _sanitize(cls, text: str) -> str:
        text = cls._ANSI_ESCAPE.sub('', text)
        return cls._CRLF_PATTERN.sub(' ', text)


class ColorCodes:
    RESET = "\x1b[0m"
    CYAN = "\x1b[36m"
    GREEN = "\x1b[32m"
    YELLOW = "\x1b[33m"
    RED = "\x1b[31m"
    CRITICAL = "\x1b[1m\x1b[41m\x1b[37m"


class ColoredFormatter(SecurityFormatter):
    """彩色控制台格式化器（仅 LogConfig.ENABLE_COLORS 时着色）"""
    LEVEL_COLORS = {
        logging.DEBUG: ColorCodes.CYAN,
        logging.INFO: ColorCodes.GREEN,
        logging.WARNING: ColorCodes.YELLOW,
        logging.ERROR: ColorCodes.RED,
        logging.CRITICAL: ColorCodes.CRITICAL,
    }

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        color = self.LEVEL_COLORS.get(record.levelno, "")
        if color and LogConfig.ENABLE_COLORS:
            return line.replace(record.levelname, f"{color}{record.levelname}{ColorCodes.RESET}", 1)
        return line
