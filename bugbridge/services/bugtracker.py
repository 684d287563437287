"""이 파일은 .py 버그 트래커 서비스 모듈로 플러그인 로딩, 설정 적용과 호출 위임을 담당합니다."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from bugbridge.core.config import CONFIG_FILE, PLUGINS_DIR
from bugbridge.core.config_validation import apply_config_schema
from bugbridge.core.errors import ConfigurationError
from bugbridge.core.plugin_base import BugTrackerPlugin
from bugbridge.core.plugin_loader import PluginLoader, PluginMeta
from bugbridge.core.types import Bug, ConfigField, Credentials, DynamicParameter, IssueDetail

logger = logging.getLogger(__name__)


def load_service_config(path: Optional[Path] = None) -> Dict[str, Any]:
    # 설정 파일이 없으면 빈 설정으로 시작한다.
    config_path = Path(path or CONFIG_FILE)
    if not config_path.exists():
        logger.warning("Bug tracker config file not found: %s", config_path)
        return {}
    data = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Bug tracker config file must contain a mapping: {config_path}")
    return data


class BugTrackerService:
    def __init__(
        self,
        plugin_id: str,
        plugins_dir: Optional[Path] = None,
        plugin_options: Optional[Dict[str, Any]] = None,
        config_defaults: Optional[Dict[str, str]] = None,
    ) -> None:
        self.loader = PluginLoader(plugins_dir or PLUGINS_DIR)
        # plugin.yml 메타데이터로 플러그인을 찾아 인스턴스를 만든다.
        self.meta: PluginMeta = self.loader.get(plugin_id)
        options = dict(plugin_options or {})
        options.setdefault("config_defaults", config_defaults or {})
        self.plugin: BugTrackerPlugin = self.loader.load_plugin(self.meta, **options)
        self.configured = False

    @classmethod
    def from_config(cls, path: Optional[Path] = None, **kwargs: Any) -> "BugTrackerService":
        data = load_service_config(path)
        plugin_id = data.get("plugin_id")
        if not plugin_id:
            raise ConfigurationError("Bug tracker config must name a plugin_id")
        service = cls(str(plugin_id), config_defaults=data.get("defaults") or {}, **kwargs)
        if data.get("configuration"):
            service.configure(data["configuration"])
        return service

    def list_plugins(self) -> List[PluginMeta]:
        return self.loader.discover()

    def run(self) -> None:
        plugins = self.list_plugins()
        logger.info("Discovered %d bug tracker plugins", len(plugins))
        logger.info("Active bug tracker plugin: %s %s", self.meta.name, self.meta.version)

    def configure(self, config: Dict[str, Optional[str]]) -> None:
        # 호스트 설정값은 문자열로 전달되므로 YAML 숫자(포트 등)도 먼저 문자열로 맞춘 뒤 검증한다.
        values = {key: None if value is None else str(value) for key, value in (config or {}).items()}
        validated = apply_config_schema(self.meta.config_schema, values)
        self.plugin.set_configuration(validated)
        self.configured = True

    def get_configuration(self) -> List[ConfigField]:
        return self.plugin.get_configuration()

    def validate_credentials(self, credentials: Credentials) -> None:
        self.plugin.validate_credentials(credentials)

    def get_parameters(
        self, credentials: Credentials, issue_detail: Optional[IssueDetail] = None
    ) -> List[DynamicParameter]:
        if issue_detail is None:
            return self.plugin.get_batch_bug_parameters(credentials)
        return self.plugin.get_bug_parameters(issue_detail, credentials)

    def change_parameter(
        self,
        credentials: Credentials,
        changed_id: str,
        params: List[DynamicParameter],
        issue_detail: Optional[IssueDetail] = None,
    ) -> List[DynamicParameter]:
        if issue_detail is None:
            return self.plugin.on_batch_bug_parameter_change(changed_id, params, credentials)
        return self.plugin.on_parameter_change(issue_detail, changed_id, params, credentials)

    def file_bug(self, credentials: Credentials, fields: Dict[str, str], batch: bool = False) -> Bug:
        if batch:
            return self.plugin.file_multi_issue_bug(fields, credentials)
        return self.plugin.file_bug(fields, credentials)

    def fetch_status(self, credentials: Credentials, bug_id: str) -> Dict[str, Any]:
        bug = self.plugin.fetch_bug_details(bug_id, credentials)
        return {
            "bug": bug,
            "open": self.plugin.is_bug_open(bug, credentials),
            "closed": self.plugin.is_bug_closed(bug, credentials),
            "reopenable": self.plugin.is_bug_closed_and_can_reopen(bug, credentials),
        }

    def reopen_bug(self, credentials: Credentials, bug: Bug, comment: str) -> None:
        self.plugin.reopen_bug(bug, comment, credentials)

    def add_comment(self, credentials: Credentials, bug_id: str, comment: str) -> None:
        self.plugin.add_comment_to_bug(Bug(bug_id=bug_id), comment, credentials)

    def deep_link(self, bug_id: str) -> str:
        return self.plugin.get_bug_deep_link(bug_id)
