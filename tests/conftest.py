"""이 파일은 .py 테스트 설정 모듈로 경로를 초기화하고 가짜 Bugzilla 클라이언트를 제공합니다."""

import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from bugbridge.core.types import Credentials, RemoteBug  # noqa: E402
from plugins.bugzilla.client import decode_field  # noqa: E402
from plugins.bugzilla.constants import SANITIZED_BUG_FIELDS  # noqa: E402
from plugins.bugzilla.main import BugzillaBugTrackerPlugin  # noqa: E402

BUGZILLA_URL = "https://bugzilla.example.com"


class FakeBugzillaClient:
    """BugzillaClient와 같은 메서드를 가진 메모리 구현이다.

    인스턴스 자체를 client_factory로 넘기면 매 연결마다 같은 객체가 반환되어
    호출 기록을 한곳에서 확인할 수 있다.
    """

    def __init__(self, version="5.0.4", products=None, legal_values=None, bugs=None):
        self.version_text = version
        self.products = dict(products or {})
        self.values = dict(legal_values or {})
        self.bugs = dict(bugs or {})
        self.failures = {}
        self.calls = []
        self.created = []
        self.updated = []
        self.comments = []
        self.factory_calls = 0
        self.close_calls = 0
        self.base_url = None
        self.proxy = None
        self.next_bug_id = 100

    def __call__(self, base_url, proxy):
        self.factory_calls += 1
        self.base_url = base_url
        self.proxy = proxy
        return self

    def _record(self, name, *args):
        self.calls.append((name,) + args)
        failure = self.failures.get(name)
        if failure is not None:
            raise failure

    def method_names(self):
        return [call[0] for call in self.calls]

    def connect(self):
        self._record("connect")

    def close(self):
        self.close_calls += 1

    def login(self, username, password):
        self._record("login", username, password)

    def version(self):
        self._record("version")
        return self.version_text

    def accessible_product_ids(self):
        self._record("accessible_product_ids")
        return list(self.products)

    def products_by_ids(self, product_ids):
        self._record("products_by_ids", list(product_ids))
        return [{"id": product_id, "name": self.products[product_id]} for product_id in product_ids]

    def legal_values(self, field, product=None):
        self._record("legal_values", field, product)
        return list(self.values.get((field, product), []))

    def create_bug(self, fields):
        self._record("create_bug", dict(fields))
        self.created.append(dict(fields))
        self.next_bug_id += 1
        return self.next_bug_id

    def get_bug(self, bug_id):
        self._record("get_bug", bug_id)
        raw = self.bugs[bug_id]
        fields = {name: decode_field(raw.get(name)) for name in SANITIZED_BUG_FIELDS}
        return RemoteBug(bug_id=bug_id, fields=fields)

    def update_bug(self, bug):
        self._record("update_bug", bug.bug_id)
        self.updated.append(bug)

    def add_comment(self, bug_id, comment):
        self._record("add_comment", bug_id, comment)
        self.comments.append((bug_id, comment))
        return 1


@pytest.fixture
def credentials():
    return Credentials(username="reporter@example.com", password="secret")


@pytest.fixture
def fake_client():
    return FakeBugzillaClient(
        products={1: "WebApp", 2: "Agent"},
        legal_values={
            ("priority", None): ["Low", "High", "Custom", "Normal"],
            ("component", "WebApp"): ["UI", "Backend", "UI"],
            ("version", "WebApp"): ["2.0", "1.0"],
        },
    )


@pytest.fixture
def plugin(fake_client):
    bugzilla = BugzillaBugTrackerPlugin(client_factory=fake_client)
    bugzilla.set_configuration({"bugzillaUrl": BUGZILLA_URL})
    return bugzilla
