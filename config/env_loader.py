"""
环境变量加载器
负责从系统环境和.env文件加载配置
"""
import os
from typing import Any, Dict

from dotenv import load_dotenv

from ._merge import deep_merge
from ._path import PROJECT_ROOT


class EnvLoader:
    """环境变量加载器

    支持两类变量:
      1. 常用的扁平变量（BASE_URL、BROWSER_HEADLESS、LOG_LEVEL ...）
      2. APP_ 前缀的嵌套变量，'__' 作为层级分隔符，例如
         APP_TIMEOUTS__CLICK=3000 -> {"timeouts": {"click": 3000}}
    """

    PREFIX = "APP_"
    NESTED_DELIMITER = "__"

    def __init__(self, env_file: Any = None):
        self._env_file = env_file
        self._loaded = False

    def load(self) -> Dict[str, Any]:
        """加载环境变量配置"""
        if not self._loaded:
            env_path = self._env_file or os.getenv("ENV_FILE", PROJECT_ROOT / ".env")
            if os.path.exists(env_path):
                load_dotenv(env_path, override=False)
            self._loaded = True

        config = self._env_to_config()
        prefixed = self._load_prefixed()
        return deep_merge(config, prefixed)

    @staticmethod
    def _env_to_config() -> Dict[str, Any]:
        """转换环境变量为配置字典"""
        config: Dict[str, Any] = {}

        if env := os.getenv("ENV"):
            config["env"] = env.lower()

        if base_url := os.getenv("BASE_URL"):
            config["portfolio"] = {"base_url": base_url}

        # 浏览器配置
        browser_config: Dict[str, Any] = {}
        if headless := os.getenv("BROWSER_HEADLESS"):
            browser_config["headless"] = headless.lower() == "true"
        if width := os.getenv("VIEWPORT_WIDTH"):
            browser_config.setdefault("viewport", {})["width"] = int(width)
        if height := os.getenv("VIEWPORT_HEIGHT"):
            browser_config.setdefault("viewport", {})["height"] = int(height)
        if browser_config:
            config["browser"] = browser_config

        # 超时配置
        timeouts = {}
        for key in ["PAGE_LOAD_TIMEOUT", "ELEMENT_WAIT_TIMEOUT", "CLICK_TIMEOUT", "LINK_RESOLUTION_TIMEOUT"]:
            if value := os.getenv(key):
                timeouts[key.replace("_TIMEOUT", "").lower()] = int(value)
        if timeouts:
            config["timeouts"] = timeouts

        # 日志配置
        log_config = {}
        if log_level := os.getenv("LOG_LEVEL"):
            log_config["log_level"] = log_level.upper()
        if log_dir := os.getenv("LOG_DIR"):
            log_config["log_dir"] = log_dir
        if log_config:
            config["log"] = log_config

        if results_dir := os.getenv("ALLURE_RESULTS_DIR"):
            config["allure"] = {"results_dir": results_dir}

        if kill := os.getenv("KILL_STRAY_DRIVERS"):
            config["cleanup"] = {"enabled": kill.lower() == "true"}

        return config

    @classmethod
    def _load_prefixed(cls) -> Dict[str, Any]:
        """加载 APP_ 前缀的嵌套环境变量"""
        result: Dict[str, Any] = {}
        for key, value in os.environ.items():
            if not key.startswith(cls.PREFIX):
                continue
            parts = key[len(cls.PREFIX):].lower().split(cls.NESTED_DELIMITER)
            current = result
            for part in parts[:-1]:
                current = current.setdefault(part, {})
            current[parts[-1]] = cls._convert_value(value)
        return result

    @classmethod
    def _convert_value(cls, data: str) -> Any:
        """转换环境变量值类型"""
        if data.lower() in ("true", "false"):
            return data.lower() == "true"
        try:
            if "." in data:
                return float(data)
            return int(data)
        except ValueError:
            pass
        if data.startswith("[") and data.endswith("]"):
            items = [item.strip() for item in data[1:-1].split(",") if item.strip()]
            return [cls._convert_value(item) for item in items]
        return data

