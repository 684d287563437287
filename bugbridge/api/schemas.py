"""이 파일은 .py API 스키마 모듈로 버그 트래커 요청/응답 모델을 정의합니다."""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from bugbridge.core.types import Bug, Credentials, DynamicParameter, IssueDetail, ParamKind


class CredentialsPayload(BaseModel):
    # 트래커 로그인 정보는 요청마다 전달되며 서버에 저장하지 않는다.
    username: str
    password: Optional[str] = None

    def to_credentials(self) -> Credentials:
        return Credentials(username=self.username, password=self.password)


class IssueDetailPayload(BaseModel):
    issue_id: str
    summary: str
    category: Optional[str] = None
    file_path: Optional[str] = None
    line_number: Optional[int] = None
    severity: Optional[str] = None
    abstract: Optional[str] = None
    deep_link: Optional[str] = None

    def to_issue_detail(self) -> IssueDetail:
        return IssueDetail(**self.model_dump())


class ParameterModel(BaseModel):
    # 동적 입력 항목의 직렬화 형태이다.
    identifier: str
    display_label: str
    kind: ParamKind = ParamKind.TEXT
    required: bool = False
    description: Optional[str] = None
    value: Optional[str] = None
    choices: List[str] = Field(default_factory=list)
    has_dependent_params: bool = False

    model_config = ConfigDict(from_attributes=True)

    def to_parameter(self) -> DynamicParameter:
        return DynamicParameter(**self.model_dump())


class ConfigFieldResponse(BaseModel):
    identifier: str
    display_label: str
    description: Optional[str] = None
    value: Optional[str] = None
    required: bool = False

    model_config = ConfigDict(from_attributes=True)


class ConfigurationUpdate(BaseModel):
    values: Dict[str, Optional[str]]


class ParametersRequest(BaseModel):
    credentials: CredentialsPayload
    # issue_detail이 없으면 일괄(batch) 등록용 항목을 만든다.
    issue_detail: Optional[IssueDetailPayload] = None


class ParameterChangeRequest(BaseModel):
    credentials: CredentialsPayload
    changed_id: str
    parameters: List[ParameterModel]
    issue_detail: Optional[IssueDetailPayload] = None


class BugCreate(BaseModel):
    credentials: CredentialsPayload
    # 입력 항목 identifier -> 값
    fields: Dict[str, str]


class BugResponse(BaseModel):
    bug_id: str
    status: Optional[str] = None
    resolution: Optional[str] = None
    link: Optional[str] = None

    @classmethod
    def from_bug(cls, bug: Bug, link: Optional[str] = None) -> "BugResponse":
        return cls(bug_id=bug.bug_id, status=bug.status, resolution=bug.resolution, link=link)


class BugStatusResponse(BugResponse):
    open: bool
    closed: bool
    reopenable: bool


class CredentialsRequest(BaseModel):
    credentials: CredentialsPayload


class ReopenRequest(BaseModel):
    credentials: CredentialsPayload
    comment: str
    # 호스트가 마지막으로 알고 있는 상태/해결 값으로 재오픈 가능 여부를 먼저 판단한다.
    status: Optional[str] = None
    resolution: Optional[str] = None


class CommentCreate(BaseModel):
    credentials: CredentialsPayload
    comment: str


class LinkResponse(BaseModel):
    bug_id: str
    link: str
