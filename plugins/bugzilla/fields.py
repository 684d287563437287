"""이 파일은 .py 필드 해석 모듈로 서버 기능에 맞춰 버그 입력 항목을 만들고 갱신합니다."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from bugbridge.core.errors import BugTrackerError, ConfigurationError
from bugbridge.core.plugin_helper import find_param
from bugbridge.core.types import DynamicParameter, IssueDetail, ParamKind
from bugbridge.core.versioning import parse_version

from plugins.bugzilla.capabilities import PREDEFINED_PRIORITIES, ApiOperation, can_use
from plugins.bugzilla.connection import SessionOpener, TrackerSession
from plugins.bugzilla.constants import (
    COMPONENT_DESCRIPTION,
    COMPONENT_LABEL,
    COMPONENT_PARAM_NAME,
    DEFAULT_DESCRIPTION_TEMPLATE,
    DEFAULT_SUMMARY_TEMPLATE,
    DESCRIPTION_PARAM_NAME,
    PRIORITY_PARAM_NAME,
    PRODUCT_DESCRIPTION,
    PRODUCT_LABEL,
    PRODUCT_PARAM_NAME,
    SUMMARY_PARAM_NAME,
    VERSION_DESCRIPTION,
    VERSION_LABEL,
    VERSION_PARAM_NAME,
)
from plugins.bugzilla.priorities import normalize_priorities

logger = logging.getLogger(__name__)
DescriptionBuilder = Callable[[IssueDetail], str]


def fetch_version(session: TrackerSession) -> float:
    raw = session.execute("obtain Bugzilla version", session.client.version)
    version = parse_version(raw)
    logger.debug("Bugzilla at %s reports version %r (%.3f)", session.url, raw, version)
    return version


def summary_param(issue_detail: Optional[IssueDetail]) -> DynamicParameter:
    return DynamicParameter(
        identifier=SUMMARY_PARAM_NAME,
        display_label="Bug Summary",
        kind=ParamKind.TEXT,
        required=True,
        description="Title of the bug to be logged",
        value=DEFAULT_SUMMARY_TEMPLATE if issue_detail is None else issue_detail.summary,
    )


def description_param(
    issue_detail: Optional[IssueDetail], description_builder: DescriptionBuilder
) -> DynamicParameter:
    return DynamicParameter(
        identifier=DESCRIPTION_PARAM_NAME,
        display_label="Bug Description",
        kind=ParamKind.TEXTAREA,
        required=True,
        value=DEFAULT_DESCRIPTION_TEMPLATE if issue_detail is None else description_builder(issue_detail),
    )


def _choice(identifier: str, label: str, description: str, choices: List[str], cascades: bool) -> DynamicParameter:
    return DynamicParameter(
        identifier=identifier,
        display_label=label,
        kind=ParamKind.CHOICE,
        required=True,
        description=description,
        choices=list(choices),
        has_dependent_params=cascades,
    )


def _text(identifier: str, label: str, description: str) -> DynamicParameter:
    return DynamicParameter(
        identifier=identifier,
        display_label=label,
        kind=ParamKind.TEXT,
        required=True,
        description=description,
    )


def get_products(session: TrackerSession) -> List[str]:
    # 접근 가능한 제품 ID를 받은 뒤 이름을 한 번에 조회한다.
    action = "obtain the list of products"
    product_ids = session.execute(action, session.client.accessible_product_ids)
    if not product_ids:
        return []
    products = session.execute(action, session.client.products_by_ids, product_ids)
    return [str(product["name"]) for product in products]


def _legal_values(session: TrackerSession, action: str, field: str, product: Optional[str] = None) -> List[str]:
    # 중복을 제거하고 알파벳 순으로 정렬한다.
    values = session.execute(action, session.client.legal_values, field, product)
    return sorted(set(values))


def get_priorities(session: TrackerSession, version: float) -> List[str]:
    if not can_use(ApiOperation.GET_PRIORITIES, version):
        return list(PREDEFINED_PRIORITIES)
    values = _legal_values(session, "obtain the list of valid priorities", PRIORITY_PARAM_NAME)
    return list(normalize_priorities(values))


def get_components(session: TrackerSession, product: str) -> List[str]:
    return _legal_values(session, "obtain the list of valid components", COMPONENT_PARAM_NAME, product)


def get_versions(session: TrackerSession, product: str) -> List[str]:
    return _legal_values(session, "obtain the list of valid versions", VERSION_PARAM_NAME, product)


def build_initial_parameters(
    open_session: SessionOpener,
    issue_detail: Optional[IssueDetail],
    description_builder: DescriptionBuilder,
) -> List[DynamicParameter]:
    """버그 등록 폼의 입력 항목을 고정 순서로 만든다.

    순서는 Summary, Description, Product, Component, Version, Priority이다.
    서버가 제품 조회를 지원하면 Product/Component/Version은 선택 항목(Product 변경 시
    하위 항목 갱신)이 되고, 그렇지 않으면 자유 입력 항목이 된다.
    """
    try:
        with open_session() as session:
            version = fetch_version(session)
            summary = summary_param(issue_detail)
            description = description_param(issue_detail, description_builder)

            if can_use(ApiOperation.GET_PRODUCTS, version):
                product = _choice(PRODUCT_PARAM_NAME, PRODUCT_LABEL, PRODUCT_DESCRIPTION, get_products(session), True)
                component = _choice(COMPONENT_PARAM_NAME, COMPONENT_LABEL, COMPONENT_DESCRIPTION, [], True)
                version_param = _choice(VERSION_PARAM_NAME, VERSION_LABEL, VERSION_DESCRIPTION, [], False)
            else:
                product = _text(PRODUCT_PARAM_NAME, PRODUCT_LABEL, PRODUCT_DESCRIPTION)
                component = _text(COMPONENT_PARAM_NAME, COMPONENT_LABEL, COMPONENT_DESCRIPTION)
                version_param = _text(VERSION_PARAM_NAME, VERSION_LABEL, VERSION_DESCRIPTION)

            priority = _choice(
                PRIORITY_PARAM_NAME, "Priority", "Bug Priority", get_priorities(session, version), False
            )
            return [summary, description, product, component, version_param, priority]
    except BugTrackerError:
        raise
    except Exception as exc:
        raise ConfigurationError(f"Error while setting Bugzilla bug fields configuration: {exc}") from exc


def on_parameter_changed(
    open_session: SessionOpener,
    changed_param_identifier: str,
    params: List[DynamicParameter],
) -> List[DynamicParameter]:
    # 하위 항목을 가진 것은 Product뿐이다. Component를 포함한 다른 항목 변경은 원격 호출 없이 그대로 돌려준다.
    if changed_param_identifier != PRODUCT_PARAM_NAME:
        return params
    try:
        with open_session() as session:
            version = fetch_version(session)
            if not can_use(ApiOperation.GET_COMPONENTS, version):
                return params

            product_param = find_param(PRODUCT_PARAM_NAME, params)
            product = product_param.value if product_param is not None else None
            component_param = find_param(COMPONENT_PARAM_NAME, params)
            version_param = find_param(VERSION_PARAM_NAME, params)

            if component_param is not None:
                component_param.choices = get_components(session, product) if product else []
            if version_param is not None and can_use(ApiOperation.GET_VERSIONS, version):
                version_param.choices = get_versions(session, product) if product else []
            return params
    except BugTrackerError:
        raise
    except Exception as exc:
        raise ConfigurationError(f"Error while changing Bugzilla bug fields configuration: {exc}") from exc
