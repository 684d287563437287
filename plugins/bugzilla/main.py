"""이 파일은 .py Bugzilla 트래커 플러그인 모듈로 호스트의 버그 등록 흐름을 Bugzilla 원격 API에 연결합니다.

Bugzilla 3.6 이상은 제품/컴포넌트/버전/우선순위 목록을 서버에서 조회하고,
그보다 오래된 서버는 자유 입력과 고정 우선순위 목록으로 대체한다.
호스트 최상위 호출마다 새 세션(로그인 포함)을 열고 호출이 끝나면 닫는다.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Mapping, Optional
from urllib.parse import urlsplit

from bugbridge.core.errors import ConfigurationError
from bugbridge.core.plugin_helper import build_default_bug_description, populate_with_defaults
from bugbridge.core.types import Bug, ConfigField, Credentials, DynamicParameter, IssueDetail

from plugins.bugzilla import fields, submission
from plugins.bugzilla.client import BugzillaClient
from plugins.bugzilla.connection import ClientFactory, TrackerSession, TrackerSettings, connect
from plugins.bugzilla.constants import (
    BUGZILLA_URL_NAME,
    DISPLAY_ONLY_SUPPORTED_VERSION,
    HTTP_PROTOCOL,
    HTTPS_PROTOCOL,
    PROXY_FIELDS,
    SHOW_BUG_CGI_URL,
    SUPPORTED_VERSIONS,
)

logger = logging.getLogger(__name__)


class BugzillaBugTrackerPlugin:
    def __init__(
        self,
        client_factory: ClientFactory = BugzillaClient,
        description_builder: Callable[[IssueDetail], str] = build_default_bug_description,
        config_defaults: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.client_factory = client_factory
        self.description_builder = description_builder
        self.config_defaults = dict(config_defaults or {})
        self.settings: Optional[TrackerSettings] = None

    # ------------------------------------------------------------------
    # 설정
    # ------------------------------------------------------------------

    def get_configuration(self) -> List[ConfigField]:
        configs = [
            ConfigField(
                identifier=DISPLAY_ONLY_SUPPORTED_VERSION,
                display_label="Supported Versions",
                description="Bug Tracker versions supported by the plugin",
                value=SUPPORTED_VERSIONS,
                required=False,
            ),
            ConfigField(
                identifier=BUGZILLA_URL_NAME,
                display_label="Bugzilla URL Prefix",
                description="Bugzilla URL prefix",
                required=True,
            ),
        ]
        # 호스트가 프록시 설정값을 돌려주도록 프록시 항목을 모두 보낸다.
        for identifier, label in PROXY_FIELDS:
            configs.append(
                ConfigField(
                    identifier=identifier,
                    display_label=label,
                    description=f"{label} for bug tracker plugin",
                    required=False,
                )
            )
        populate_with_defaults(configs, self.config_defaults)
        return configs

    def set_configuration(self, config: Mapping[str, Optional[str]]) -> None:
        url = config.get(BUGZILLA_URL_NAME)
        if url is None:
            raise ConfigurationError("Invalid configuration passed")
        url = url.strip()
        if not url.startswith(f"{HTTP_PROTOCOL}://") and not url.startswith(f"{HTTPS_PROTOCOL}://"):
            raise ConfigurationError(
                f"Bugzilla URL protocol should be either {HTTP_PROTOCOL} or {HTTPS_PROTOCOL}"
            )
        if url.endswith("/"):
            url = url[:-1]

        try:
            parts = urlsplit(url)
            # 포트가 숫자가 아니면 여기서 ValueError가 난다.
            parts.port
        except ValueError as exc:
            raise ConfigurationError(f"Invalid Bugzilla URL: {url}") from exc
        if not parts.hostname:
            raise ConfigurationError("Bugzilla host name cannot be empty.")

        self.settings = TrackerSettings(url=url, protocol=parts.scheme, config=dict(config))
        logger.info("Bugzilla plugin configured for %s", url)

    def test_configuration(self, credentials: Credentials) -> None:
        self.validate_credentials(credentials)

    def validate_credentials(self, credentials: Credentials) -> None:
        with self._connect(credentials):
            pass

    def get_short_display_name(self) -> str:
        return "Bugzilla"

    def get_long_display_name(self) -> str:
        return f"Bugzilla at {self.settings.url if self.settings else None}"

    def requires_authentication(self) -> bool:
        return True

    def get_bug_deep_link(self, bug_id: str) -> str:
        return f"{self._require_settings().url}{SHOW_BUG_CGI_URL}{bug_id}"

    # ------------------------------------------------------------------
    # 입력 항목
    # ------------------------------------------------------------------

    def get_bug_parameters(
        self, issue_detail: Optional[IssueDetail], credentials: Credentials
    ) -> List[DynamicParameter]:
        return fields.build_initial_parameters(
            lambda: self._connect(credentials), issue_detail, self.description_builder
        )

    def get_batch_bug_parameters(self, credentials: Credentials) -> List[DynamicParameter]:
        return self.get_bug_parameters(None, credentials)

    def on_parameter_change(
        self,
        issue_detail: Optional[IssueDetail],
        changed_param_identifier: str,
        current_values: List[DynamicParameter],
        credentials: Credentials,
    ) -> List[DynamicParameter]:
        return fields.on_parameter_changed(
            lambda: self._connect(credentials), changed_param_identifier, current_values
        )

    def on_batch_bug_parameter_change(
        self,
        changed_param_identifier: str,
        current_values: List[DynamicParameter],
        credentials: Credentials,
    ) -> List[DynamicParameter]:
        return self.on_parameter_change(None, changed_param_identifier, current_values, credentials)

    # ------------------------------------------------------------------
    # 버그 등록과 상태 관리
    # ------------------------------------------------------------------

    def file_bug(self, params: Dict[str, str], credentials: Credentials) -> Bug:
        with self._connect(credentials) as session:
            return submission.file_bug(session, params)

    def file_multi_issue_bug(self, params: Dict[str, str], credentials: Credentials) -> Bug:
        return self.file_bug(params, credentials)

    def is_bug_open(self, bug: Bug, credentials: Credentials) -> bool:
        return submission.is_bug_open(bug)

    def is_bug_closed(self, bug: Bug, credentials: Credentials) -> bool:
        return submission.is_bug_closed(bug)

    def is_bug_closed_and_can_reopen(self, bug: Bug, credentials: Credentials) -> bool:
        return submission.is_bug_closed_and_can_reopen(bug)

    def reopen_bug(self, bug: Bug, comment: str, credentials: Credentials) -> None:
        submission.reopen_bug(lambda: self._connect(credentials), bug, comment)

    def add_comment_to_bug(self, bug: Bug, comment: str, credentials: Credentials) -> None:
        with self._connect(credentials) as session:
            submission.add_comment(session, bug.bug_id, comment)

    def fetch_bug_details(self, bug_id: str, credentials: Credentials) -> Bug:
        with self._connect(credentials) as session:
            return submission.fetch_bug_details(session, bug_id)

    # ------------------------------------------------------------------

    def _require_settings(self) -> TrackerSettings:
        if self.settings is None:
            raise ConfigurationError("Bugzilla plugin is not configured")
        return self.settings

    def _connect(self, credentials: Credentials) -> TrackerSession:
        return connect(credentials, self._require_settings(), self.client_factory)
