from ._path import PROJECT_ROOT
from .manager import ConfigManager
from .env_loader import EnvLoader
from .yaml_loader import YamlLoader

# 全局唯一配置实例
settings = ConfigManager()

__all__ = [
    "settings",
    "ConfigManager",
    "EnvLoader",
    "YamlLoader",
    "PROJECT_ROOT",
]
