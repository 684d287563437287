"""이 파일은 .py HTTP 어댑터로 프록시를 지원하는 JSON-RPC 요청 기능을 제공합니다."""

from __future__ import annotations

from dataclasses import dataclass
import itertools
import logging
from typing import Any, Dict, Optional, Tuple
from urllib.parse import quote

import requests

from bugbridge.core.config import CONNECT_TIMEOUT, SOCKET_TIMEOUT
from bugbridge.core.errors import AdapterError, RpcConnectionError, RpcFault, TransportError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProxyDescriptor:
    host: str
    port: int
    username: Optional[str] = None
    password: Optional[str] = None

    def to_url(self) -> str:
        # 인증 프록시는 user:password@host:port 형태로 requests에 전달한다.
        if self.username:
            credentials = quote(self.username, safe="")
            if self.password:
                credentials = f"{credentials}:{quote(self.password, safe='')}"
            return f"http://{credentials}@{self.host}:{self.port}"
        return f"http://{self.host}:{self.port}"


class JsonRpcClient:
    def __init__(
        self,
        endpoint: str,
        proxy: Optional[ProxyDescriptor] = None,
        connect_timeout: float = CONNECT_TIMEOUT,
        socket_timeout: float = SOCKET_TIMEOUT,
        verify_ssl: bool = True,
    ) -> None:
        self.endpoint = endpoint
        self.proxy = proxy
        self.timeout: Tuple[float, float] = (connect_timeout, socket_timeout)
        self.verify_ssl = verify_ssl
        self._session: Optional[requests.Session] = None
        self._ids = itertools.count(1)

    def connect(self) -> None:
        # 세션을 만들고 요청을 미리 준비해 엔드포인트가 유효한지 확인한다.
        session = requests.Session()
        session.trust_env = False
        session.verify = self.verify_ssl
        session.headers.update({"Content-Type": "application/json", "Accept": "application/json"})
        if self.proxy is not None:
            proxy_url = self.proxy.to_url()
            session.proxies.update({"http": proxy_url, "https": proxy_url})
        try:
            session.prepare_request(requests.Request("POST", self.endpoint))
        except (requests.exceptions.InvalidURL, requests.exceptions.MissingSchema,
                requests.exceptions.InvalidSchema) as exc:
            session.close()
            raise RpcConnectionError(f"Could not establish connection to {self.endpoint}: {exc}") from exc
        self._session = session

    def close(self) -> None:
        if self._session is not None:
            self._session.close()
            self._session = None

    def call(self, method: str, params: Optional[Dict[str, Any]] = None) -> Any:
        if self._session is None:
            raise AdapterError("JSON-RPC client is not connected")
        request_id = next(self._ids)
        payload = {"method": method, "params": [params or {}], "id": request_id}
        logger.debug("JSON-RPC call %s (id=%s) to %s", method, request_id, self.endpoint)
        try:
            response = self._session.post(self.endpoint, json=payload, timeout=self.timeout)
        except requests.Timeout as exc:
            raise AdapterError(f"{method} request timed out: {exc}") from exc
        except requests.RequestException as exc:
            raise AdapterError(f"{method} request failed: {exc}") from exc

        if response.status_code >= 400:
            raise TransportError(
                response.status_code,
                f"HTTP {response.status_code} {response.reason or ''}".strip(),
            )
        try:
            body = response.json()
        except ValueError as exc:
            raise AdapterError(f"{method} returned a non-JSON response") from exc

        error = body.get("error") if isinstance(body, dict) else None
        if error:
            if isinstance(error, dict):
                raise RpcFault(error.get("code"), str(error.get("message", error)))
            raise RpcFault(None, str(error))
        if not isinstance(body, dict) or "result" not in body:
            raise AdapterError(f"{method} returned a malformed JSON-RPC response")
        return body["result"]
