"""이 파일은 .py 버그 제출 모듈로 등록, 재오픈, 코멘트와 상태 판단을 담당합니다."""

from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional

from bugbridge.core.errors import (
    AuthenticationError,
    BugTrackerError,
    DataConversionError,
    DomainError,
    InvalidBugIdError,
)
from bugbridge.core.types import Bug, FieldValue, RemoteBug

from plugins.bugzilla.connection import SessionOpener, TrackerSession
from plugins.bugzilla.constants import (
    CLOSED_STATUSES,
    COMMENT,
    DESCRIPTION_PARAM_NAME,
    HIDDEN_BUG_PARAMS,
    MAX_SUMMARY_LENGTH,
    NON_REOPENABLE_RESOLUTIONS,
    SANITIZED_BUG_FIELDS,
    STATUS_NEW,
    STATUS_REOPENED,
    SUMMARY_PARAM_NAME,
)

logger = logging.getLogger(__name__)


def truncate_summary(summary: Optional[str]) -> Optional[str]:
    if summary is not None and len(summary) > MAX_SUMMARY_LENGTH:
        return summary[:MAX_SUMMARY_LENGTH]
    return summary


def build_bug_fields(params: Mapping[str, Optional[str]]) -> Dict[str, Optional[str]]:
    # 사용자 입력 위에 숨김 기본값을 덮어쓰고 comment/summary를 만든다.
    fields: Dict[str, Optional[str]] = dict(params)
    fields.update(HIDDEN_BUG_PARAMS)
    fields.pop(DESCRIPTION_PARAM_NAME, None)
    fields[COMMENT] = params.get(DESCRIPTION_PARAM_NAME)
    fields[SUMMARY_PARAM_NAME] = truncate_summary(params.get(SUMMARY_PARAM_NAME))
    return fields


def is_bug_closed(bug: Bug) -> bool:
    return bug.status in CLOSED_STATUSES


def is_bug_open(bug: Bug) -> bool:
    return not is_bug_closed(bug)


def can_reopen_bug(bug: Bug) -> bool:
    return bug.resolution not in NON_REOPENABLE_RESOLUTIONS


def is_bug_closed_and_can_reopen(bug: Bug) -> bool:
    return is_bug_closed(bug) and can_reopen_bug(bug)


def parse_bug_id(bug_id: str) -> int:
    try:
        return int(str(bug_id).strip())
    except ValueError as exc:
        raise InvalidBugIdError(f"Invalid Bugzilla bug id: {bug_id!r}") from exc


def file_bug(session: TrackerSession, params: Mapping[str, Optional[str]]) -> Bug:
    fields = build_bug_fields(params)
    bug_id = session.execute("create bug", session.client.create_bug, fields)
    logger.info("Filed bug %s on %s", bug_id, session.url)
    return Bug(bug_id=str(bug_id), status=STATUS_NEW)


def sanitize_field(name: str, field: Optional[FieldValue]) -> FieldValue:
    # 비어 있는 표식은 값 없음으로, 문자열이 아닌 값은 변환 오류로 처리한다.
    if field is None or not field.present:
        return FieldValue(present=False)
    if isinstance(field.value, str):
        return field
    raise DataConversionError(
        f"Error when converting bug properties data from Bugzilla: field '{name}' has unexpected value {field.value!r}"
    )


def sanitize_remote_bug(bug: RemoteBug) -> RemoteBug:
    fields = dict(bug.fields)
    for name in SANITIZED_BUG_FIELDS:
        fields[name] = sanitize_field(name, bug.fields.get(name))
    return RemoteBug(bug_id=bug.bug_id, fields=fields, extra=dict(bug.extra))


def reopen_bug(open_session: SessionOpener, bug: Bug, comment: str) -> None:
    """버그를 CONFIRMED 상태로 되돌리고 코멘트를 남긴다.

    상태 변경과 코멘트 등록은 별도 호출이라 원자적이지 않다. 상태 변경 후
    코멘트 등록이 실패하면 버그는 재오픈된 채 남고 그 사실을 로그로 남긴 뒤 예외를 전파한다.
    """
    if not can_reopen_bug(bug):
        raise DomainError(f"Bug {bug.bug_id} cannot be reopened.")
    bug_number = parse_bug_id(bug.bug_id)
    with open_session() as session:
        remote = session.execute(f"fetch bug {bug_number}", session.client.get_bug, bug_number)
        remote = sanitize_remote_bug(remote)
        remote.fields["status"] = FieldValue(present=True, value=STATUS_REOPENED)
        remote.fields["resolution"] = FieldValue(present=False)
        session.execute(f"update bug {bug_number}", session.client.update_bug, remote)
        logger.info("Reopened bug %s on %s", bug_number, session.url)
        try:
            session.execute(f"add comment to bug {bug_number}", session.client.add_comment, bug_number, comment)
        except BugTrackerError:
            logger.error("Bug %s was reopened on %s but the reopen comment could not be added", bug_number, session.url)
            raise


def add_comment(session: TrackerSession, bug_id: str, comment: str) -> None:
    bug_number = parse_bug_id(bug_id)
    session.execute(f"add comment to bug {bug_number}", session.client.add_comment, bug_number, comment)


def fetch_bug_details(session: TrackerSession, bug_id: str) -> Bug:
    try:
        bug_number = parse_bug_id(bug_id)
        remote = session.execute(f"fetch bug {bug_number}", session.client.get_bug, bug_number)
        status = sanitize_field("status", remote.fields.get("status"))
        resolution = sanitize_field("resolution", remote.fields.get("resolution"))
    except AuthenticationError:
        raise
    except Exception as exc:
        raise BugTrackerError("The bug status could not be fetched correctly") from exc
    return Bug(bug_id=str(remote.bug_id), status=status.value, resolution=resolution.value)
