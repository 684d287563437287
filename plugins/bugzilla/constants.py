"""이 파일은 .py Bugzilla 플러그인 상수 모듈로 필드 이름, 상태 값, 프록시 항목 표를 정의합니다."""

from typing import Dict, Tuple

# 프록시 설정 항목 이름은 호스트 플러그인 API의 일부이므로 바꿀 수 없다.
# 설정 스키마 생성과 프록시 해석이 같은 표를 순서대로 사용한다.
HTTP_PROXY_HOST = "httpProxyHost"
HTTP_PROXY_PORT = "httpProxyPort"
HTTP_PROXY_USERNAME = "httpProxyUsername"
HTTP_PROXY_PASSWORD = "httpProxyPassword"
HTTPS_PROXY_HOST = "httpsProxyHost"
HTTPS_PROXY_PORT = "httpsProxyPort"
HTTPS_PROXY_USERNAME = "httpsProxyUsername"
HTTPS_PROXY_PASSWORD = "httpsProxyPassword"

PROXY_FIELDS: Tuple[Tuple[str, str], ...] = (
    (HTTP_PROXY_HOST, "HTTP Proxy Host"),
    (HTTP_PROXY_PORT, "HTTP Proxy Port"),
    (HTTP_PROXY_USERNAME, "HTTP Proxy Username"),
    (HTTP_PROXY_PASSWORD, "HTTP Proxy Password"),
    (HTTPS_PROXY_HOST, "HTTPS Proxy Host"),
    (HTTPS_PROXY_PORT, "HTTPS Proxy Port"),
    (HTTPS_PROXY_USERNAME, "HTTPS Proxy Username"),
    (HTTPS_PROXY_PASSWORD, "HTTPS Proxy Password"),
)

# 호스트가 값이 없는 설정 항목을 직렬화할 때 보내는 표식
PROXY_EMPTY_VALUE = "null"

HTTP_PROTOCOL = "http"
HTTPS_PROTOCOL = "https"

# 프로토콜별 (host, port, username, password) 설정 키
PROXY_KEYS_BY_PROTOCOL: Dict[str, Tuple[str, str, str, str]] = {
    HTTP_PROTOCOL: (HTTP_PROXY_HOST, HTTP_PROXY_PORT, HTTP_PROXY_USERNAME, HTTP_PROXY_PASSWORD),
    HTTPS_PROTOCOL: (HTTPS_PROXY_HOST, HTTPS_PROXY_PORT, HTTPS_PROXY_USERNAME, HTTPS_PROXY_PASSWORD),
}

BUGZILLA_URL_NAME = "bugzillaUrl"
DISPLAY_ONLY_SUPPORTED_VERSION = "displayOnlySupportedVersion"
SUPPORTED_VERSIONS = "5.0"
JSONRPC_PATH = "/jsonrpc.cgi"
SHOW_BUG_CGI_URL = "/show_bug.cgi?id="

SUMMARY_PARAM_NAME = "summary"
DESCRIPTION_PARAM_NAME = "description"
PRODUCT_PARAM_NAME = "product"
COMPONENT_PARAM_NAME = "component"
VERSION_PARAM_NAME = "version"
PRIORITY_PARAM_NAME = "priority"
COMMENT = "comment"

PRODUCT_LABEL = "Product"
PRODUCT_DESCRIPTION = "Name of Product against which bug needs to be logged"
COMPONENT_LABEL = "Component"
COMPONENT_DESCRIPTION = "Name of Component against which bug needs to be logged"
VERSION_LABEL = "Version"
VERSION_DESCRIPTION = "Version against which bug needs to be logged"

DEFAULT_SUMMARY_TEMPLATE = "Fix $ATTRIBUTE_CATEGORY$ in $ATTRIBUTE_FILE$"
DEFAULT_DESCRIPTION_TEMPLATE = "Issue Ids: $ATTRIBUTE_INSTANCE_ID$\n$ISSUE_DEEPLINK$"

# Bugzilla 4 기본 워크플로에서 NEW/REOPENED가 빠져 UNCONFIRMED/CONFIRMED를 사용한다.
STATUS_NEW = "UNCONFIRMED"
STATUS_REOPENED = "CONFIRMED"
CLOSED_STATUSES = frozenset({"RESOLVED", "CLOSED", "VERIFIED"})
NON_REOPENABLE_RESOLUTIONS = frozenset({"WONTFIX", "DUPLICATE", "INVALID", "WORKSFORME"})

# 폼에 노출되지 않지만 등록 시 항상 적용되는 값
HIDDEN_BUG_PARAMS: Dict[str, str] = {
    "status": STATUS_NEW,
    "platform": "All",
    "op_sys": "All",
    "severity": "normal",
}

MAX_SUMMARY_LENGTH = 255

# Bug.get 결과에서 값이 비어 있는 표식으로 올 수 있는 필드
SANITIZED_BUG_FIELDS: Tuple[str, ...] = (
    "alias",
    "product",
    "component",
    "version",
    "status",
    "resolution",
    "op_sys",
    "platform",
    "summary",
)
