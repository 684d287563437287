"""이 파일은 .py 플러그인 헬퍼 모듈로 호스트가 트래커 플러그인에 제공하는 공통 기능을 모읍니다."""

from __future__ import annotations

from typing import Iterable, List, Mapping, Optional

from .types import ConfigField, DynamicParameter, IssueDetail


def build_default_bug_description(issue_detail: IssueDetail, include_link: bool = True) -> str:
    # 진단 결과 정보를 사람이 읽을 수 있는 버그 본문으로 만든다.
    lines: List[str] = [f"Issue Ids: {issue_detail.issue_id}"]
    if issue_detail.category:
        lines.append(f"Category: {issue_detail.category}")
    if issue_detail.file_path:
        location = issue_detail.file_path
        if issue_detail.line_number is not None:
            location = f"{location}:{issue_detail.line_number}"
        lines.append(f"Location: {location}")
    if issue_detail.severity:
        lines.append(f"Severity: {issue_detail.severity}")
    if issue_detail.abstract:
        lines.append("")
        lines.append(issue_detail.abstract.strip())
    if include_link and issue_detail.deep_link:
        lines.append("")
        lines.append(issue_detail.deep_link)
    return "\n".join(lines)


def find_param(identifier: str, params: Iterable[DynamicParameter]) -> Optional[DynamicParameter]:
    for param in params:
        if param.identifier == identifier:
            return param
    return None


def populate_with_defaults(configs: List[ConfigField], defaults: Optional[Mapping[str, str]]) -> None:
    # 값이 비어 있는 설정 항목에만 호스트 기본값을 채운다.
    if not defaults:
        return
    for config in configs:
        if config.value is None and defaults.get(config.identifier) is not None:
            config.value = defaults[config.identifier]
