"""이 파일은 .py 연결 관리 모듈로 프록시를 고려한 Bugzilla 인증 세션을 만들고 전송 오류를 분류합니다.

세션은 호스트의 최상위 호출 하나 동안만 사용한다. 호출마다 새로 로그인하며
세션을 캐시하거나 재사용하지 않는다.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from http import HTTPStatus
import logging
from typing import Any, Callable, Mapping, Optional, Tuple, TypeVar

from bugbridge.adapters.http import ProxyDescriptor
from bugbridge.core.errors import (
    AdapterError,
    AuthenticationError,
    BugTrackerError,
    ConfigurationError,
    ConnectivityError,
    RpcConnectionError,
    TransportError,
)
from bugbridge.core.types import Credentials

from plugins.bugzilla.client import BugzillaClient
from plugins.bugzilla.constants import HTTPS_PROTOCOL, PROXY_EMPTY_VALUE, PROXY_KEYS_BY_PROTOCOL

logger = logging.getLogger(__name__)

T = TypeVar("T")
ClientFactory = Callable[[str, Optional[ProxyDescriptor]], BugzillaClient]


@dataclass(frozen=True)
class TrackerSettings:
    # set_configuration에서 검증된 URL과 전체 설정(프록시 포함)이다.
    url: str
    protocol: str
    config: Mapping[str, Optional[str]] = field(default_factory=dict)


def _has_value(value: Optional[str]) -> bool:
    return bool(value) and value != PROXY_EMPTY_VALUE


def _port_to_number(port: Optional[str]) -> int:
    try:
        return int(str(port).strip())
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Port {port} could not be converted to number") from exc


def resolve_proxy(config: Mapping[str, Optional[str]], protocol: str) -> Optional[Tuple[str, int]]:
    # 대상 프로토콜에 맞는 프록시 host/port를 고른다. host가 비어 있으면 프록시를 쓰지 않는다.
    host_key, port_key, _, _ = PROXY_KEYS_BY_PROTOCOL.get(protocol, PROXY_KEYS_BY_PROTOCOL["http"])
    host = config.get(host_key)
    if not _has_value(host):
        return None
    port = config.get(port_key)
    port_number = _port_to_number(port)
    if port_number < 1:
        raise ConfigurationError(
            f"Error in bug tracker proxy configuration - proxy host is '{host}' but port is '{port}'"
        )
    return host, port_number


def resolve_proxy_credentials(
    config: Mapping[str, Optional[str]], protocol: str
) -> Tuple[Optional[str], Optional[str]]:
    _, _, username_key, password_key = PROXY_KEYS_BY_PROTOCOL.get(protocol, PROXY_KEYS_BY_PROTOCOL["http"])
    username = config.get(username_key)
    if not _has_value(username):
        return None, None
    password = config.get(password_key)
    return username, password if _has_value(password) else None


def build_proxy(settings: TrackerSettings) -> Optional[ProxyDescriptor]:
    proxy = resolve_proxy(settings.config, settings.protocol)
    if proxy is None:
        return None
    username, password = resolve_proxy_credentials(settings.config, settings.protocol)
    # 정책상 제한이며 네트워크 호출 전에 거부한다.
    if username is not None and settings.protocol == HTTPS_PROTOCOL:
        raise ConfigurationError(
            "Bugzilla plugin does not currently support using authenticated proxy for Bugzilla HTTPS requests."
        )
    host, port = proxy
    return ProxyDescriptor(host=host, port=port, username=username, password=password)


class TrackerSession:
    def __init__(self, settings: TrackerSettings, client: BugzillaClient, proxy: Optional[ProxyDescriptor]) -> None:
        self.settings = settings
        self.client = client
        self.proxy = proxy

    @property
    def url(self) -> str:
        return self.settings.url

    def execute(self, action: str, method: Callable[..., T], *args: Any) -> T:
        """원격 호출 하나를 실행하고 실패를 분류된 예외로 바꾼다.

        401은 서버 인증 실패, 407은 프록시 인증 실패로 ``AuthenticationError`` 가 되고,
        나머지 전송/RPC 실패는 원래 메시지를 담은 ``ConnectivityError`` 가 된다.
        이미 분류된 ``BugTrackerError`` 는 그대로 전파된다.
        """
        try:
            return method(*args)
        except BugTrackerError:
            raise
        except TransportError as exc:
            if exc.status == HTTPStatus.UNAUTHORIZED:
                raise AuthenticationError("Bugzilla server authentication failed") from exc
            if exc.status == HTTPStatus.PROXY_AUTHENTICATION_REQUIRED:
                raise AuthenticationError("Http(s) proxy authentication for Bugzilla failed") from exc
            raise ConnectivityError(f"Cannot {action} (Bugzilla server {self.url}): {exc}") from exc
        except (AdapterError, KeyError, TypeError, ValueError) as exc:
            raise ConnectivityError(f"Cannot {action} (Bugzilla server {self.url}): {exc}") from exc

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "TrackerSession":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


SessionOpener = Callable[[], TrackerSession]


def connect(
    credentials: Credentials,
    settings: TrackerSettings,
    client_factory: ClientFactory = BugzillaClient,
) -> TrackerSession:
    # 1) 프록시와 프록시 인증 정보를 해석한다(HTTPS 인증 프록시는 여기서 거부된다).
    proxy = build_proxy(settings)
    if proxy is None:
        logger.info("Connecting to Bugzilla at %s", settings.url)
    else:
        logger.info("Connecting to Bugzilla at %s via proxy %s:%s", settings.url, proxy.host, proxy.port)

    # 2) 전송 계층 연결을 연다.
    client = client_factory(settings.url, proxy)
    try:
        client.connect()
    except RpcConnectionError as exc:
        raise AuthenticationError(f"Could not connect to Bugzilla server at {settings.url}") from exc
    except (AdapterError, OSError, ValueError) as exc:
        raise ConnectivityError(f"Could not connect to Bugzilla server at {settings.url}") from exc

    session = TrackerSession(settings, client, proxy)

    # 3) 사용자 자격 증명으로 로그인한다. 어떤 실패도 인증 오류로 본다.
    try:
        session.execute("log in", client.login, credentials.username, credentials.password)
    except AuthenticationError:
        session.close()
        raise
    except BugTrackerError as exc:
        session.close()
        raise AuthenticationError(f"Could not login to Bugzilla server at {settings.url}") from exc
    logger.debug("Authenticated to %s as %s", settings.url, credentials.username)
    return session
