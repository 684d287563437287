"""이 파일은 .py FastAPI 앱 모듈로 버그 트래커 플러그인 기능을 REST 엔드포인트로 제공합니다."""

from __future__ import annotations

from functools import lru_cache
import logging
from typing import List

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from bugbridge.core.config import API_PREFIX
from bugbridge.core.errors import (
    AuthenticationError,
    BugTrackerError,
    ConfigurationError,
    ConnectivityError,
    DataConversionError,
    DomainError,
    InvalidBugIdError,
)
from bugbridge.core.types import Bug
from bugbridge.services.bugtracker import BugTrackerService

from .schemas import (
    BugCreate,
    BugResponse,
    BugStatusResponse,
    CommentCreate,
    ConfigFieldResponse,
    ConfigurationUpdate,
    CredentialsRequest,
    LinkResponse,
    ParameterChangeRequest,
    ParameterModel,
    ParametersRequest,
    ReopenRequest,
)

logger = logging.getLogger(__name__)

BUGTRACKER_PREFIX = f"{API_PREFIX}/bugtracker"

# 분류된 오류 유형별 HTTP 상태 코드
ERROR_STATUS = (
    # 요청 쪽 버그 ID 오류는 DataConversionError보다 먼저 검사한다.
    (InvalidBugIdError, 400),
    (AuthenticationError, 401),
    (ConfigurationError, 400),
    (DomainError, 409),
    (ConnectivityError, 502),
    (DataConversionError, 502),
)

app = FastAPI(title="bugbridge")


@lru_cache(maxsize=1)
def get_service() -> BugTrackerService:
    return BugTrackerService.from_config()


@app.exception_handler(BugTrackerError)
def _bugtracker_error_handler(request: Request, exc: BugTrackerError) -> JSONResponse:
    status_code = 500
    for error_type, code in ERROR_STATUS:
        if isinstance(exc, error_type):
            status_code = code
            break
    logger.warning("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


@app.get(f"{BUGTRACKER_PREFIX}/configuration", response_model=List[ConfigFieldResponse])
def get_configuration(service: BugTrackerService = Depends(get_service)) -> List[ConfigFieldResponse]:
    return [ConfigFieldResponse.model_validate(field) for field in service.get_configuration()]


@app.put(f"{BUGTRACKER_PREFIX}/configuration", status_code=204)
def set_configuration(
    payload: ConfigurationUpdate,
    service: BugTrackerService = Depends(get_service),
) -> None:
    service.configure(payload.values)


@app.post(f"{BUGTRACKER_PREFIX}/credentials/validate", status_code=204)
def validate_credentials(
    payload: CredentialsRequest,
    service: BugTrackerService = Depends(get_service),
) -> None:
    service.validate_credentials(payload.credentials.to_credentials())


@app.post(f"{BUGTRACKER_PREFIX}/parameters", response_model=List[ParameterModel])
def get_parameters(
    payload: ParametersRequest,
    service: BugTrackerService = Depends(get_service),
) -> List[ParameterModel]:
    issue_detail = payload.issue_detail.to_issue_detail() if payload.issue_detail else None
    params = service.get_parameters(payload.credentials.to_credentials(), issue_detail)
    return [ParameterModel.model_validate(param) for param in params]


@app.post(f"{BUGTRACKER_PREFIX}/parameters/change", response_model=List[ParameterModel])
def change_parameter(
    payload: ParameterChangeRequest,
    service: BugTrackerService = Depends(get_service),
) -> List[ParameterModel]:
    issue_detail = payload.issue_detail.to_issue_detail() if payload.issue_detail else None
    params = service.change_parameter(
        payload.credentials.to_credentials(),
        payload.changed_id,
        [param.to_parameter() for param in payload.parameters],
        issue_detail,
    )
    return [ParameterModel.model_validate(param) for param in params]


@app.post(f"{BUGTRACKER_PREFIX}/bugs", response_model=BugResponse, status_code=201)
def file_bug(
    payload: BugCreate,
    service: BugTrackerService = Depends(get_service),
) -> BugResponse:
    bug = service.file_bug(payload.credentials.to_credentials(), payload.fields)
    return BugResponse.from_bug(bug, link=service.deep_link(bug.bug_id))


@app.post(f"{BUGTRACKER_PREFIX}/bugs/batch", response_model=BugResponse, status_code=201)
def file_multi_issue_bug(
    payload: BugCreate,
    service: BugTrackerService = Depends(get_service),
) -> BugResponse:
    bug = service.file_bug(payload.credentials.to_credentials(), payload.fields, batch=True)
    return BugResponse.from_bug(bug, link=service.deep_link(bug.bug_id))


@app.post(f"{BUGTRACKER_PREFIX}/bugs/{{bug_id}}/status", response_model=BugStatusResponse)
def fetch_status(
    bug_id: str,
    payload: CredentialsRequest,
    service: BugTrackerService = Depends(get_service),
) -> BugStatusResponse:
    result = service.fetch_status(payload.credentials.to_credentials(), bug_id)
    bug = result["bug"]
    return BugStatusResponse(
        bug_id=bug.bug_id,
        status=bug.status,
        resolution=bug.resolution,
        link=service.deep_link(bug.bug_id),
        open=result["open"],
        closed=result["closed"],
        reopenable=result["reopenable"],
    )


@app.post(f"{BUGTRACKER_PREFIX}/bugs/{{bug_id}}/reopen", status_code=204)
def reopen_bug(
    bug_id: str,
    payload: ReopenRequest,
    service: BugTrackerService = Depends(get_service),
) -> None:
    bug = Bug(bug_id=bug_id, status=payload.status, resolution=payload.resolution)
    service.reopen_bug(payload.credentials.to_credentials(), bug, payload.comment)


@app.post(f"{BUGTRACKER_PREFIX}/bugs/{{bug_id}}/comments", status_code=204)
def add_comment(
    bug_id: str,
    payload: CommentCreate,
    service: BugTrackerService = Depends(get_service),
) -> None:
    service.add_comment(payload.credentials.to_credentials(), bug_id, payload.comment)


@app.get(f"{BUGTRACKER_PREFIX}/bugs/{{bug_id}}/link", response_model=LinkResponse)
def get_link(
    bug_id: str,
    service: BugTrackerService = Depends(get_service),
) -> LinkResponse:
    return LinkResponse(bug_id=bug_id, link=service.deep_link(bug_id))
