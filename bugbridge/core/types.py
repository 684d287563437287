"""이 파일은 .py 타입 정의 모듈로 호스트와 트래커 플러그인이 주고받는 모델을 제공합니다."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Credentials:
    # 사용자가 입력한 트래커 로그인 정보이다.
    username: Optional[str]
    password: Optional[str] = None


@dataclass
class IssueDetail:
    # 버그를 등록하려는 진단 결과(Finding)의 요약 정보이다.
    issue_id: str
    summary: str
    category: Optional[str] = None
    file_path: Optional[str] = None
    line_number: Optional[int] = None
    severity: Optional[str] = None
    abstract: Optional[str] = None
    deep_link: Optional[str] = None


class ParamKind(str, Enum):
    TEXT = "TEXT"
    TEXTAREA = "TEXTAREA"
    CHOICE = "CHOICE"


@dataclass
class DynamicParameter:
    # 호스트 폼에 그려지는 입력 항목이다. CHOICE만 choices/has_dependent_params를 사용한다.
    identifier: str
    display_label: str
    kind: ParamKind = ParamKind.TEXT
    required: bool = False
    description: Optional[str] = None
    value: Optional[str] = None
    choices: List[str] = field(default_factory=list)
    has_dependent_params: bool = False


@dataclass
class ConfigField:
    # 플러그인 설정 화면에 노출되는 항목이다.
    identifier: str
    display_label: str
    description: Optional[str] = None
    value: Optional[str] = None
    required: bool = False


@dataclass(frozen=True)
class Bug:
    # 트래커에 등록된 버그의 식별자와 상태이다.
    bug_id: str
    status: Optional[str] = None
    resolution: Optional[str] = None


@dataclass(frozen=True)
class FieldValue:
    # 원격 응답의 단일 필드이다. 값이 비어 있는 표식으로 오면 present=False가 된다.
    present: bool
    value: Any = None


@dataclass
class RemoteBug:
    # Bug.get 응답을 필드 단위로 해석한 결과이다.
    bug_id: int
    fields: Dict[str, FieldValue] = field(default_factory=dict)
    extra: Dict[str, Any] = field(default_factory=dict)
