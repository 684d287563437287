"""이 파일은 .py 설정 모듈로 경로, 타임아웃과 기본 위치를 정의합니다."""

import os
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[2]
PLUGINS_DIR = REPO_ROOT / "plugins"
CONFIG_DIR = REPO_ROOT / "config"
CONFIG_FILE = Path(os.getenv("BUGBRIDGE_CONFIG", str(CONFIG_DIR / "bugtracker.yml")))
LOG_LEVEL = os.getenv("BUGBRIDGE_LOG_LEVEL", "INFO")
API_PREFIX = "/api/v1"

# 원격 트래커 연결에 적용되는 고정 타임아웃(초)
CONNECT_TIMEOUT = 5
SOCKET_TIMEOUT = 10
