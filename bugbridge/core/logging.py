"""이 파일은 .py 로깅 초기화 모듈로 기본 로그 포맷을 설정합니다."""

import logging
from typing import Optional

from .config import LOG_LEVEL


def setup_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(
        level=(level or LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
