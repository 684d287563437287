"""이 파일은 .py 테스트 모듈로 버전별 기능 게이트와 우선순위 정렬을 검증합니다."""

from plugins.bugzilla.capabilities import PREDEFINED_PRIORITIES, ApiOperation, can_use
from plugins.bugzilla.priorities import normalize_priorities


def test_operations_require_3_6() -> None:
    for operation in ApiOperation:
        assert operation.min_version == 3.6
        assert not can_use(operation, 3.0)
        assert can_use(operation, 3.6)
        assert can_use(operation, 5.0)


def test_operations_are_distinct_members() -> None:
    assert len(list(ApiOperation)) == 4
    assert ApiOperation.GET_PRODUCTS is not ApiOperation.GET_COMPONENTS


def test_can_use_is_monotonic() -> None:
    versions = [0.0, 2.22, 3.4, 3.6, 3.67, 4.4, 5.061]
    for operation in ApiOperation:
        results = [can_use(operation, version) for version in versions]
        # 한 번 사용 가능해지면 이후 버전에서도 계속 사용 가능하다.
        assert results == sorted(results)


def test_predefined_priorities() -> None:
    assert PREDEFINED_PRIORITIES == ("P1", "P2", "P3", "P4", "P5")


def test_normalize_priorities_orders_known_labels_first() -> None:
    result = normalize_priorities(["Custom1", "High", "Custom2", "Low"])
    assert result == ("High", "Low", "Custom1", "Custom2")


def test_normalize_priorities_is_case_insensitive() -> None:
    result = normalize_priorities(["lowest", "IMMEDIATE", "normal"])
    assert result == ("IMMEDIATE", "normal", "lowest")


def test_normalize_priorities_empty() -> None:
    assert normalize_priorities([]) == ()
