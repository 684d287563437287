"""이 파일은 .py 플러그인 인터페이스 모듈로 호스트가 의존하는 버그 트래커 기능 목록을 정의합니다."""

from typing import Dict, List, Optional, Protocol, runtime_checkable

from .types import Bug, ConfigField, Credentials, DynamicParameter, IssueDetail


@runtime_checkable
class BugTrackerPlugin(Protocol):
    """호스트 플랫폼이 호출하는 버그 트래커 플러그인의 고정 기능 인터페이스.

    구현체는 상속 없이 아래 메서드만 제공하면 된다. 모든 원격 호출 메서드는
    호출마다 새로 인증하며 실패 시 ``bugbridge.core.errors`` 의 분류된 예외를 던진다.
    """

    def get_configuration(self) -> List[ConfigField]:
        ...

    def set_configuration(self, config: Dict[str, Optional[str]]) -> None:
        ...

    def validate_credentials(self, credentials: Credentials) -> None:
        ...

    def get_bug_parameters(
        self, issue_detail: Optional[IssueDetail], credentials: Credentials
    ) -> List[DynamicParameter]:
        ...

    def get_batch_bug_parameters(self, credentials: Credentials) -> List[DynamicParameter]:
        ...

    def on_parameter_change(
        self,
        issue_detail: Optional[IssueDetail],
        changed_param_identifier: str,
        current_values: List[DynamicParameter],
        credentials: Credentials,
    ) -> List[DynamicParameter]:
        ...

    def on_batch_bug_parameter_change(
        self,
        changed_param_identifier: str,
        current_values: List[DynamicParameter],
        credentials: Credentials,
    ) -> List[DynamicParameter]:
        ...

    def file_bug(self, params: Dict[str, str], credentials: Credentials) -> Bug:
        ...

    def file_multi_issue_bug(self, params: Dict[str, str], credentials: Credentials) -> Bug:
        ...

    def is_bug_open(self, bug: Bug, credentials: Credentials) -> bool:
        ...

    def is_bug_closed(self, bug: Bug, credentials: Credentials) -> bool:
        ...

    def is_bug_closed_and_can_reopen(self, bug: Bug, credentials: Credentials) -> bool:
        ...

    def reopen_bug(self, bug: Bug, comment: str, credentials: Credentials) -> None:
        ...

    def add_comment_to_bug(self, bug: Bug, comment: str, credentials: Credentials) -> None:
        ...

    def fetch_bug_details(self, bug_id: str, credentials: Credentials) -> Bug:
        ...

    def get_bug_deep_link(self, bug_id: str) -> str:
        ...
