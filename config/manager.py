import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ._merge import deep_merge
from ._path import PROJECT_ROOT
from .env_loader import EnvLoader
from .yaml_loader import YamlLoader


class BrowserConfig(BaseModel):
    """浏览器配置模型"""
    type: str = "chromium"  # chromium/firefox/webkit
    headless: bool = True
    channel: Optional[str] = None  # chrome/msedge 等品牌通道
    viewport: Dict[str, int] = {"width": 1366, "height": 900}
    args: List[str] = Field(default_factory=lambda: ["--start-maximized"])

    @field_validator("type")
    @classmethod
    def validate_browser_type(cls, v):
        valid_types = ["chromium", "firefox", "webkit"]
        if v not in valid_types:
            raise ValueError(f"无效的浏览器类型: {v}, 必须是 {valid_types}")
        return v

    model_config = ConfigDict(protected_namespaces=())


class TimeoutsConfig(BaseModel):
    """超时配置模型（毫秒）"""
    page_load: int = 90000
    ready_state: int = 30000
    element_wait: int = 15000
    click: int = 2000
    theme_change: int = 3000
    link_resolution: int = 7000
    poll: int = 50

    @field_validator("*")
    @classmethod
    def validate_positive(cls, v):
        if v <= 0:
            raise ValueError("超时值必须大于0")
        return v

    model_config = ConfigDict(protected_namespaces=())


class LogConfig(BaseModel):
    """日志配置模型"""
    log_dir: Path = PROJECT_ROOT / "logs"
    log_level: str = "INFO"
    log_file: str = "test_run.log"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        v = str(v).upper()
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v not in valid_levels:
            raise ValueError(f"无效的日志级别: {v}, 必须是 {valid_levels}")
        return v

    model_config = ConfigDict(protected_namespaces=())


class AllureConfig(BaseModel):
    """Allure报告配置"""
    results_dir: Path = PROJECT_ROOT / "reports/allure-results"
    attach_snapshots: bool = True

    model_config = ConfigDict(protected_namespaces=())


class CleanupConfig(BaseModel):
    """残留驱动进程清理配置"""
    enabled: bool = True
    process_names: List[str] = Field(
        default_factory=lambda: ["chromedriver", "msedgedriver", "geckodriver"]
    )

    model_config = ConfigDict(protected_namespaces=())


class PortfolioConfig(BaseModel):
    """被测站点配置"""
    base_url: str = "https://ravifel.github.io/"
    expected_title: str = "Ravi"

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v):
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"base_url 必须以 http:// 或 https:// 开头: {v}")
        return v

    model_config = ConfigDict(protected_namespaces=())


class AppConfig(BaseModel):
    """应用级配置模型"""

    env: str = "dev"

    browser: BrowserConfig = Field(default_factory=BrowserConfig)
    timeouts: TimeoutsConfig = Field(default_factory=TimeoutsConfig)
    log: LogConfig = Field(default_factory=LogConfig)
    allure: AllureConfig = Field(default_factory=AllureConfig)
    cleanup: CleanupConfig = Field(default_factory=CleanupConfig)
    portfolio: PortfolioConfig = Field(default_factory=PortfolioConfig)

    project_root: Path = PROJECT_ROOT

    model_config = ConfigDict(protected_namespaces=(), extra="ignore")

    @field_validator("env")
    @classmethod
    def validate_env(cls, v):
        valid_envs = ["dev", "ci", "prod"]
        if v not in valid_envs:
            raise ValueError(f"无效环境: {v}, 必须是 {valid_envs}")
        return v


class ConfigManager:
    """配置管理核心

    优先级（低 → 高）: environments/base.yaml → environments/<env>.yaml
    → 环境变量/.env → 命令行覆盖（--config-overrides）
    """

    def __init__(self, yaml_loader: Optional[YamlLoader] = None, env_loader: Optional[EnvLoader] = None):
        self._config: Optional[AppConfig] = None
        self._yaml_loader = yaml_loader or YamlLoader()
        self._env_loader = env_loader or EnvLoader()
        self._overrides: Dict[str, Any] = {}

    def _load_config(self) -> AppConfig:
        """加载完整配置"""
        # 先读取 .env，ENV 变量才能决定要合并哪个环境文件
        env_config = self._env_loader.load()

        env = self._overrides.get("env") or env_config.get("env") or os.getenv("ENV", "dev")
        base_config = self._yaml_loader.load_environment(env=env)

        merged = deep_merge(base_config, env_config)
        final_config = deep_merge(merged, self._overrides)

        try:
            return AppConfig(**final_config)
        except ValidationError as e:
            self._handle_validation_error(e)

    @property
    def config(self) -> AppConfig:
        if self._config is None:
            self._config = self._load_config()
        return self._config

    def reload(self) -> AppConfig:
        """丢弃已加载的配置并重新读取"""
        self._config = None
        return self.config

    def __getattr__(self, name: str) -> Any:
        """动态属性访问"""
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return getattr(self.config, name)
        except AttributeError:
            available = ", ".join(AppConfig.model_fields)
            raise AttributeError(f"配置中不存在属性: {name}\n可用属性: {available}") from None

    def get(self, path: str, default: Any = None) -> Any:
        """
        安全获取嵌套配置
        示例: settings.get("timeouts.click", 2000)
        """
        current = self.config.model_dump()
        for key in path.split("."):
            if isinstance(current, dict) and key in current:
                current = current[key]
            else:
                return default
        return current

    def apply_overrides(self, overrides_str: str) -> None:
        """
        应用命令行覆盖
        格式: "key1=value1,key2.subkey=value2"
        """
        if not overrides_str:
            return

        self._overrides = {}
        for pair in overrides_str.split(","):
            if "=" not in pair:
                continue
            key, value = pair.split("=", 1)
            keys = [k.strip() for k in key.strip().split(".")]
            current = self._overrides
            for k in keys[:-1]:
                current = current.setdefault(k, {})
            current[keys[-1]] = self._parse_value(value.strip())

        # 已加载的配置需要重新合并
        self._config = None

    def _parse_value(self, value: str) -> Any:
        """智能解析配置值类型"""
        if value.lower() in ("true", "false"):
            return value.lower() == "true"

        try:
            if "." in value:
                return float(value)
            return int(value)
        except ValueError:
            pass

        # 列表，使用 ; 分隔以免与覆盖项的 , 冲突: [a;b]
        if value.startswith("[") and value.endswith("]"):
            inner = value[1:-1].strip()
            if not inner:
                return []
            return [self._parse_value(item.strip()) for item in inner.split(";")]

        return value

    def to_yaml(self) -> str:
        """生成配置快照YAML"""
        data = self.config.model_dump(mode="json")
        return yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)

    @staticmethod
    def _handle_validation_error(error: ValidationError):
        """处理验证错误"""
        messages = []
        for err in error.errors():
            loc = ".".join(str(part) for part in err["loc"])
            messages.append(f"配置项 '{loc}': {err['msg']} (值: {err.get('input')})")

        raise RuntimeError("配置验证失败:\n" + "\n".join(messages)) from None


if __name__ == '__main__':
    print(ConfigManager().to_yaml())
