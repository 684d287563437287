"""이 파일은 .py 코어 패키지 초기화 모듈로 주요 심볼을 재노출합니다."""

from .config import CONFIG_FILE, PLUGINS_DIR
from .errors import (
    AuthenticationError,
    BugTrackerError,
    ConfigurationError,
    ConnectivityError,
    DataConversionError,
    DomainError,
)
from .logging import setup_logging
from .plugin_base import BugTrackerPlugin
from .plugin_loader import PluginLoader, PluginMeta
from .types import Bug, ConfigField, Credentials, DynamicParameter, IssueDetail, ParamKind
from .versioning import parse_version

__all__ = [
    "AuthenticationError",
    "Bug",
    "BugTrackerError",
    "BugTrackerPlugin",
    "CONFIG_FILE",
    "ConfigField",
    "ConfigurationError",
    "ConnectivityError",
    "Credentials",
    "DataConversionError",
    "DomainError",
    "DynamicParameter",
    "IssueDetail",
    "ParamKind",
    "PLUGINS_DIR",
    "PluginLoader",
    "PluginMeta",
    "parse_version",
    "setup_logging",
]
