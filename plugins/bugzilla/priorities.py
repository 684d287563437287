"""이 파일은 .py 우선순위 정렬 모듈로 서버가 알려준 우선순위를 표준 순서로 정리합니다."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Tuple

UNKNOWN_SORT_KEY = 100


@dataclass(frozen=True)
class PriorityEntry:
    label: str
    sort_key: int = UNKNOWN_SORT_KEY


# Bugzilla XML/JSON API로는 sortkey를 얻을 수 없어 기본 우선순위만 순서를 고정한다.
KNOWN_PRIORITIES: Dict[str, PriorityEntry] = {
    entry.label.lower(): entry
    for entry in (
        PriorityEntry("Immediate", 0),
        PriorityEntry("Highest", 1),
        PriorityEntry("High", 2),
        PriorityEntry("Normal", 3),
        PriorityEntry("Low", 4),
        PriorityEntry("Lowest", 5),
    )
}


def normalize_priorities(priorities: Iterable[str]) -> Tuple[str, ...]:
    # sorted()는 안정 정렬이므로 알 수 없는 값끼리는 서버가 준 순서를 유지한다.
    entries = [
        PriorityEntry(value, KNOWN_PRIORITIES[value.lower()].sort_key)
        if value.lower() in KNOWN_PRIORITIES
        else PriorityEntry(value)
        for value in priorities
    ]
    return tuple(entry.label for entry in sorted(entries, key=lambda entry: entry.sort_key))
