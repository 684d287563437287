"""이 파일은 .py 엔트리포인트로 버그 트래커 서비스 기본 실행을 제공합니다."""

from bugbridge.core.logging import setup_logging
from bugbridge.services.bugtracker import BugTrackerService


def main() -> None:
    setup_logging()
    service = BugTrackerService.from_config()
    service.run()


if __name__ == "__main__":
    main()
