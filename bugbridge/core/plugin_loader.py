"""이 파일은 .py 플러그인 로더 모듈로 트래커 플러그인 메타데이터 로딩과 동적 임포트를 수행합니다."""

import importlib.util
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .plugin_base import BugTrackerPlugin

logger = logging.getLogger(__name__)

BUGTRACKER_PLUGIN_TYPE = "bugtracker"
REQUIRED_META_FIELDS = ("id", "name", "version", "type", "entry_point", "class_name")


@dataclass(frozen=True)
class PluginMeta:
    # plugin.yml 한 개에 대응하는 트래커 플러그인 정보
    plugin_id: str
    name: str
    version: str
    plugin_type: str
    entry_point: str
    class_name: str
    plugin_dir: Path
    description: Optional[str] = None
    supported_versions: Optional[str] = None
    config_schema: Optional[dict] = None

    @property
    def module_path(self) -> Path:
        return self.plugin_dir / self.entry_point

    @classmethod
    def from_file(cls, plugin_file: Path) -> "PluginMeta":
        data = yaml.safe_load(plugin_file.read_text(encoding="utf-8")) or {}
        missing = [name for name in REQUIRED_META_FIELDS if name not in data]
        if missing:
            raise ValueError(f"Missing required field(s) {', '.join(missing)} in {plugin_file}")
        # YAML이 5.0을 숫자로 읽지 않도록 문자열로 고정한다.
        supported = data.get("supported_versions")
        return cls(
            plugin_id=str(data["id"]),
            name=str(data["name"]),
            version=str(data["version"]),
            plugin_type=str(data["type"]),
            entry_point=str(data["entry_point"]),
            class_name=str(data["class_name"]),
            plugin_dir=plugin_file.parent,
            description=data.get("description"),
            supported_versions=None if supported is None else str(supported),
            config_schema=data.get("config_schema"),
        )


class PluginLoader:
    """plugins 디렉토리에서 ``type: bugtracker`` 플러그인을 찾아 인스턴스로 만든다."""

    def __init__(self, plugins_dir: Path):
        self.plugins_dir = Path(plugins_dir)

    def discover(self) -> List[PluginMeta]:
        found: Dict[str, PluginMeta] = {}
        for plugin_file in sorted(self.plugins_dir.rglob("plugin.yml")):
            meta = PluginMeta.from_file(plugin_file)
            if meta.plugin_type != BUGTRACKER_PLUGIN_TYPE:
                logger.debug("Skipping %s plugin %s", meta.plugin_type, meta.plugin_id)
                continue
            if meta.plugin_id in found:
                raise ValueError(f"Duplicate plugin id {meta.plugin_id} in {plugin_file}")
            found[meta.plugin_id] = meta
        return list(found.values())

    def get(self, plugin_id: str) -> PluginMeta:
        for meta in self.discover():
            if meta.plugin_id == plugin_id:
                return meta
        raise KeyError(f"Plugin not found: {plugin_id}")

    def load_plugin(self, meta: PluginMeta, **options: Any) -> BugTrackerPlugin:
        module = self._import_module(meta)
        try:
            plugin_class = getattr(module, meta.class_name)
        except AttributeError as exc:
            raise ImportError(f"Class {meta.class_name} not found in {meta.module_path}") from exc
        plugin = plugin_class(**options)
        # 기반 클래스 대신 호스트가 호출하는 메서드를 모두 갖추었는지 본다.
        if not isinstance(plugin, BugTrackerPlugin):
            raise TypeError(f"{meta.class_name} does not implement BugTrackerPlugin")
        logger.info("Loaded bug tracker plugin %s %s", meta.plugin_id, meta.version)
        return plugin

    def _import_module(self, meta: PluginMeta):
        module_path = meta.module_path
        if not module_path.is_file():
            raise FileNotFoundError(f"Entry point not found: {module_path}")
        spec = importlib.util.spec_from_file_location(f"bugbridge_plugin_{meta.plugin_id}", module_path)
        if spec is None or spec.loader is None:
            raise ImportError(f"Cannot load module from {module_path}")
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        return module
