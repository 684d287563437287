"""이 파일은 .py 공통 예외 모듈로 버그 트래커 연동 오류 유형을 표준화합니다."""


class BugTrackerError(RuntimeError):
    """버그 트래커 연동 중 발생한 모든 분류된 오류의 기반 예외입니다."""


class AuthenticationError(BugTrackerError):
    """로그인 또는 프록시 인증 실패 시 사용합니다. 사용자는 자격 증명을 다시 입력해야 합니다."""


class ConnectivityError(BugTrackerError):
    """네트워크/전송 계층 실패(타임아웃 포함)에 사용합니다."""


class ConfigurationError(BugTrackerError, ValueError):
    """잘못된 URL, 포트, 지원하지 않는 프록시 조합 등 설정 오류에 사용합니다."""


class DomainError(BugTrackerError):
    """재오픈할 수 없는 버그를 재오픈하려는 등 업무 규칙 위반에 사용합니다."""


class DataConversionError(BugTrackerError):
    """원격 데이터의 형태가 예상과 다를 때 사용합니다."""


class InvalidBugIdError(DataConversionError, ValueError):
    """호출자가 전달한 버그 ID를 정수로 해석할 수 없을 때 사용합니다. 원격 호출 전에 발생합니다."""


class AdapterError(RuntimeError):
    """외부 어댑터(전송 계층) 실행 오류에 사용합니다."""


class TransportError(AdapterError):
    """HTTP 상태 코드로 실패한 요청입니다."""

    def __init__(self, status: int, message: str) -> None:
        super().__init__(message)
        self.status = status


class RpcFault(AdapterError):
    """원격 RPC가 오류 객체를 반환한 경우입니다."""

    def __init__(self, code: object, message: str) -> None:
        super().__init__(message)
        self.code = code


class RpcConnectionError(AdapterError):
    """엔드포인트에 대한 연결 자체를 구성할 수 없는 경우입니다."""
