"""environments/ 下的分层配置：base.yaml 打底，<env>.yaml 覆盖"""
from pathlib import Path
from typing import Any, Dict

import yaml

from ._merge import deep_merge
from ._path import PROJECT_ROOT

BASE_FILE = "base.yaml"


class YamlLoader:

    def __init__(self, config_dir: Any = PROJECT_ROOT / "environments"):
        self.config_dir = Path(config_dir)

    def load_environment(self, env: str = "dev") -> Dict[str, Any]:
        """base.yaml 必须存在；环境文件缺失时只用 base.yaml"""
        base_path = self.config_dir / BASE_FILE
        if not base_path.is_file():
            raise FileNotFoundError(f"基础配置文件不存在: {base_path}")

        overlay_path = self.config_dir / f"{env}.yaml"
        overlay = self._read(overlay_path) if overlay_path.is_file() else {}
        return deep_merge(self._read(base_path), overlay)

    @staticmethod
    def _read(path: Path) -> Dict[str, Any]:
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ValueError(f"{path.name} 不是合法的 YAML: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError(f"{path.name} 顶层必须是映射，实际为 {type(data).__name__}")
        return data
