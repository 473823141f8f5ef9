"""Unit tests for client metadata extraction."""

from unittest.mock import Mock

from pydantic import SecretStr

from ogla.presentation.api.dependencies import get_request_context
from ogla_config.settings import Settings


def _settings(trust_proxy: bool) -> Settings:
    return Settings(
        jwt_secret_key=SecretStr("test-secret"),
        postgres_password=SecretStr("test-password"),
        api_trust_proxy_headers=trust_proxy,
    )


def _request(headers: dict, host: str | None = "10.0.0.5") -> Mock:
    request = Mock()
    request.headers = headers
    request.client = Mock(host=host) if host else None
    return request


class TestGetRequestContext:
    def test_first_forwarded_hop_is_used(self):
        request = _request(
            {"x-forwarded-for": "203.0.113.9, 10.0.0.1", "user-agent": "Firefox"},
        )

        context = get_request_context(request, _settings(trust_proxy=True))

        assert context.ip_address == "203.0.113.9"
        assert context.user_agent == "Firefox"

    def test_socket_peer_without_proxy_header(self):
        context = get_request_context(_request({}), _settings(trust_proxy=True))

        assert context.ip_address == "10.0.0.5"
        assert context.user_agent == "unknown"

    def test_forwarded_header_ignored_when_untrusted(self):
        request = _request({"x-forwarded-for": "203.0.113.9"})

        context = get_request_context(request, _settings(trust_proxy=False))

        assert context.ip_address == "10.0.0.5"

    def test_unknown_when_nothing_is_available(self):
        context = get_request_context(
            _request({}, host=None),
            _settings(trust_proxy=True),
        )

        assert context.ip_address == "unknown"
