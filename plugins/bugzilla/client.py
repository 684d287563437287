"""이 파일은 .py Bugzilla 원격 API 클라이언트 모듈로 JSON-RPC 메서드를 타입이 있는 호출로 감쌉니다."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from bugbridge.adapters.http import JsonRpcClient, ProxyDescriptor
from bugbridge.core.errors import AdapterError
from bugbridge.core.types import FieldValue, RemoteBug

from plugins.bugzilla.constants import COMMENT, JSONRPC_PATH, SANITIZED_BUG_FIELDS

logger = logging.getLogger(__name__)

# Bug.update에 그대로 되돌려 보낼 수 있는 필드. alias는 갱신 형식이 달라 보내지 않는다.
UPDATABLE_BUG_FIELDS = ("product", "component", "version", "status", "resolution", "op_sys", "platform", "summary")


def decode_field(raw: Any) -> FieldValue:
    # 빈 값 표식(None, 빈 문자열/목록/객체)은 존재하지 않는 값으로 본다.
    if raw is None or raw == "" or raw == [] or raw == {}:
        return FieldValue(present=False)
    # Bugzilla 5는 alias를 문자열 목록으로 돌려준다. 여러 개면 쉼표로 잇는다.
    if isinstance(raw, list) and all(isinstance(item, str) for item in raw):
        return FieldValue(present=True, value=", ".join(raw))
    return FieldValue(present=True, value=raw)


class BugzillaClient:
    """Bugzilla WebService(JSON-RPC) 호출 모음.

    ``login`` 이 돌려준 토큰은 이후 모든 호출에 ``Bugzilla_token`` 으로 붙는다.
    전송 오류는 ``bugbridge.core.errors`` 의 어댑터 예외로 그대로 전파된다.
    """

    def __init__(
        self,
        base_url: str,
        proxy: Optional[ProxyDescriptor] = None,
        rpc: Optional[JsonRpcClient] = None,
    ) -> None:
        self.base_url = base_url
        self.rpc = rpc or JsonRpcClient(f"{base_url}{JSONRPC_PATH}", proxy=proxy)
        self.token: Optional[str] = None

    def connect(self) -> None:
        self.rpc.connect()

    def close(self) -> None:
        self.rpc.close()

    def _call(self, method: str, params: Optional[Dict[str, Any]] = None) -> Any:
        params = dict(params or {})
        if self.token:
            params["Bugzilla_token"] = self.token
        result = self.rpc.call(method, params)
        if result is None:
            return {}
        return result

    def version(self) -> str:
        return str(self._call("Bugzilla.version").get("version", ""))

    def login(self, username: Optional[str], password: Optional[str]) -> None:
        result = self._call("User.login", {"login": username or "", "password": password or ""})
        self.token = result.get("token")
        logger.debug("Logged in to %s as user id %s", self.base_url, result.get("id"))

    def accessible_product_ids(self) -> List[int]:
        return [int(product_id) for product_id in self._call("Product.get_accessible").get("ids") or []]

    def products_by_ids(self, product_ids: Iterable[int]) -> List[Dict[str, Any]]:
        return list(self._call("Product.get", {"ids": list(product_ids)}).get("products") or [])

    def product_id(self, name: str) -> int:
        products = self._call("Product.get", {"names": [name]}).get("products") or []
        if not products:
            raise AdapterError(f"Product '{name}' does not exist or is not accessible")
        return int(products[0]["id"])

    def legal_values(self, field: str, product: Optional[str] = None) -> List[str]:
        params: Dict[str, Any] = {"field": field}
        if product:
            params["product_id"] = self.product_id(product)
        return [str(value) for value in self._call("Bug.legal_values", params).get("values") or []]

    def create_bug(self, fields: Mapping[str, Any]) -> int:
        # 최초 코멘트는 Bug.create의 description 인자로 전달된다.
        params = {key: value for key, value in fields.items() if key != COMMENT and value is not None}
        if fields.get(COMMENT) is not None:
            params["description"] = fields[COMMENT]
        return int(self._call("Bug.create", params)["id"])

    def get_bug(self, bug_id: int) -> RemoteBug:
        bugs = self._call("Bug.get", {"ids": [bug_id]}).get("bugs") or []
        if not bugs:
            raise AdapterError(f"Bug {bug_id} was not returned by Bug.get")
        raw = bugs[0]
        fields = {name: decode_field(raw.get(name)) for name in SANITIZED_BUG_FIELDS}
        extra = {key: value for key, value in raw.items() if key not in fields}
        return RemoteBug(bug_id=int(raw.get("id", bug_id)), fields=fields, extra=extra)

    def update_bug(self, bug: RemoteBug) -> None:
        params: Dict[str, Any] = {"ids": [bug.bug_id]}
        for name in UPDATABLE_BUG_FIELDS:
            field = bug.fields.get(name)
            if field is None:
                continue
            if field.present:
                params[name] = field.value
            elif name == "resolution":
                # 재오픈 시 resolution은 빈 문자열로 지운다.
                params[name] = ""
        self._call("Bug.update", params)

    def add_comment(self, bug_id: int, comment: str) -> int:
        return int(self._call("Bug.add_comment", {"id": bug_id, "comment": comment}).get("id", 0))
