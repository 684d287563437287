"""이 파일은 .py 트래커 플러그인 설정 스키마 검증 모듈입니다.

plugin.yml의 ``config_schema`` 는 ``required`` 목록과 항목별 ``properties``
(type, enum, max_length, pattern, default)로 구성된다.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Mapping, Optional

from .errors import ConfigurationError

_TYPE_MAP = {
    "string": str,
    "integer": int,
    "boolean": bool,
}


def _is_blank(value: Any) -> bool:
    # 호스트는 비어 있는 설정 항목을 None 또는 빈 문자열로 보낸다.
    return value is None or value == ""


def _check_value(key: str, rules: Mapping[str, Any], value: Any) -> List[str]:
    problems: List[str] = []
    expected = rules.get("type")
    if expected:
        expected_type = _TYPE_MAP.get(expected)
        if expected_type is None:
            return [f"Unsupported type in schema: {expected}"]
        # bool은 int의 하위 타입이다.
        if not isinstance(value, expected_type) or (expected == "integer" and isinstance(value, bool)):
            return [f"Config '{key}' must be {expected}"]

    allowed = rules.get("enum")
    if allowed is not None and value not in allowed:
        problems.append(f"Config '{key}' must be one of {allowed}")

    if isinstance(value, str) and value:
        limit = rules.get("max_length")
        if limit is not None and len(value) > limit:
            problems.append(f"Config '{key}' length must be <= {limit}")
        pattern = rules.get("pattern")
        if pattern and re.search(pattern, value) is None:
            problems.append(f"Config '{key}' does not match pattern")
    return problems


def apply_config_schema(schema: Optional[Dict[str, Any]], config: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """스키마 기본값을 채운 설정 사본을 반환한다.

    위반 사항은 모아서 ``ConfigurationError`` 하나로 보고한다. 값이 None인 항목은
    "설정되지 않음"으로 보고 타입 검증을 건너뛴다.
    """
    if config is not None and not isinstance(config, Mapping):
        raise ConfigurationError("Bug tracker configuration must be an object")
    result: Dict[str, Any] = dict(config or {})
    if not schema:
        return result

    properties: Mapping[str, Mapping[str, Any]] = schema.get("properties") or {}
    for key, rules in properties.items():
        if _is_blank(result.get(key)) and rules.get("default") is not None:
            result[key] = rules["default"]

    problems = [
        f"Missing required config: {key}" for key in schema.get("required") or [] if _is_blank(result.get(key))
    ]
    for key, value in result.items():
        rules = properties.get(key)
        if rules and value is not None:
            problems.extend(_check_value(key, rules, value))

    if problems:
        raise ConfigurationError("; ".join(problems))
    return result
