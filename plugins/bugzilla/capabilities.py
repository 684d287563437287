"""이 파일은 .py 기능 게이트 모듈로 서버 버전에 따라 사용할 수 있는 Bugzilla API를 판단합니다."""

from enum import Enum

# 우선순위를 조회할 수 없는 서버에서 사용하는 고정 목록
PREDEFINED_PRIORITIES = ("P1", "P2", "P3", "P4", "P5")


class ApiOperation(Enum):
    # (이름, 해당 기능을 제공하는 최소 Bugzilla 버전)
    GET_PRIORITIES = ("priorities", 3.6)
    GET_PRODUCTS = ("products", 3.6)
    GET_COMPONENTS = ("components", 3.6)
    GET_VERSIONS = ("versions", 3.6)

    def __init__(self, label: str, min_version: float) -> None:
        self.label = label
        self.min_version = min_version


def can_use(operation: ApiOperation, version: float) -> bool:
    return version >= operation.min_version
