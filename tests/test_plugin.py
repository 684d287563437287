"""이 파일은 .py 테스트 모듈로 Bugzilla 플러그인 설정과 표시 정보를 검증합니다."""

import pytest

from bugbridge.core.errors import AuthenticationError, ConfigurationError, TransportError
from plugins.bugzilla.main import BugzillaBugTrackerPlugin

from conftest import BUGZILLA_URL, FakeBugzillaClient


def test_get_configuration_order() -> None:
    configs = BugzillaBugTrackerPlugin().get_configuration()
    assert [config.identifier for config in configs] == [
        "displayOnlySupportedVersion",
        "bugzillaUrl",
        "httpProxyHost",
        "httpProxyPort",
        "httpProxyUsername",
        "httpProxyPassword",
        "httpsProxyHost",
        "httpsProxyPort",
        "httpsProxyUsername",
        "httpsProxyPassword",
    ]
    assert configs[0].value == "5.0"
    assert configs[1].required
    assert not any(config.required for config in configs[2:])


def test_get_configuration_defaults() -> None:
    plugin = BugzillaBugTrackerPlugin(
        config_defaults={"bugzillaUrl": "https://bugs.internal", "displayOnlySupportedVersion": "9"}
    )
    configs = {config.identifier: config for config in plugin.get_configuration()}
    assert configs["bugzillaUrl"].value == "https://bugs.internal"
    # 이미 값이 있는 항목은 덮어쓰지 않는다.
    assert configs["displayOnlySupportedVersion"].value == "5.0"


@pytest.mark.parametrize(
    "url, expected",
    [
        ("http://host/", "http://host"),
        ("https://bugzilla.example.com", "https://bugzilla.example.com"),
        ("https://bugzilla.example.com:8443/bugs/", "https://bugzilla.example.com:8443/bugs"),
        ("  https://host  ", "https://host"),
    ],
)
def test_set_configuration_normalizes_url(url, expected) -> None:
    plugin = BugzillaBugTrackerPlugin()
    plugin.set_configuration({"bugzillaUrl": url})
    assert plugin.settings.url == expected
    assert plugin.get_long_display_name() == f"Bugzilla at {expected}"


@pytest.mark.parametrize(
    "config, message",
    [
        ({}, "Invalid configuration passed"),
        ({"bugzillaUrl": "ftp://host"}, "protocol should be either http or https"),
        ({"bugzillaUrl": "https://"}, "host name cannot be empty"),
        ({"bugzillaUrl": "https://host:port"}, "Invalid Bugzilla URL"),
    ],
)
def test_set_configuration_rejects_invalid_urls(config, message) -> None:
    with pytest.raises(ConfigurationError, match=message):
        BugzillaBugTrackerPlugin().set_configuration(config)


def test_deep_link(plugin) -> None:
    assert plugin.get_bug_deep_link("42") == f"{BUGZILLA_URL}/show_bug.cgi?id=42"


def test_unconfigured_plugin(credentials) -> None:
    plugin = BugzillaBugTrackerPlugin(client_factory=FakeBugzillaClient())
    with pytest.raises(ConfigurationError, match="not configured"):
        plugin.get_bug_deep_link("1")
    with pytest.raises(ConfigurationError):
        plugin.validate_credentials(credentials)


def test_display_names(plugin) -> None:
    assert plugin.get_short_display_name() == "Bugzilla"
    assert plugin.requires_authentication()


def test_validate_credentials(plugin, fake_client, credentials) -> None:
    plugin.validate_credentials(credentials)
    assert fake_client.method_names() == ["connect", "login"]
    assert fake_client.close_calls == 1


def test_validate_credentials_rejected(plugin, fake_client, credentials) -> None:
    fake_client.failures["login"] = TransportError(401, "HTTP 401 Unauthorized")
    with pytest.raises(AuthenticationError):
        plugin.test_configuration(credentials)


def test_proxy_configuration_passed_to_client(credentials) -> None:
    client = FakeBugzillaClient()
    plugin = BugzillaBugTrackerPlugin(client_factory=client)
    plugin.set_configuration(
        {
            "bugzillaUrl": "http://bugzilla.example.com",
            "httpProxyHost": "proxy.local",
            "httpProxyPort": "3128",
            "httpProxyUsername": "alice",
            "httpProxyPassword": "pw",
            "httpsProxyHost": "null",
            "httpsProxyPort": "null",
        }
    )
    plugin.validate_credentials(credentials)
    assert client.proxy.host == "proxy.local"
    assert client.proxy.username == "alice"
