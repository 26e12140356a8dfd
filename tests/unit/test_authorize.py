"""Unit tests for state generation and authorize URL building."""

import re
import urllib.parse

import pytest

from loopback_redirect.core.redirect import (
    ValidationError,
    build_authorize_url,
    generate_state,
)

AUTHORIZE_ENDPOINT = "https://login.example.com/common/oauth2/authorize"


def _query(url: str) -> dict[str, list[str]]:
    return urllib.parse.parse_qs(urllib.parse.urlsplit(url).query)


class TestGenerateState:
    def test_url_safe(self):
        state = generate_state()

        assert re.fullmatch(r"[A-Za-z0-9_-]+", state)
        assert len(state) >= 43

    def test_unique(self):
        assert len({generate_state() for _ in range(50)}) == 50

    def test_custom_length(self):
        assert len(generate_state(48)) == 64

    def test_too_short(self):
        with pytest.raises(ValidationError):
            generate_state(8)


class TestBuildAuthorizeUrl:
    def test_required_parameters(self):
        url = build_authorize_url(
            AUTHORIZE_ENDPOINT, "client-123", "http://localhost:53124", "s1"
        )

        assert url.startswith(AUTHORIZE_ENDPOINT + "?")
        assert _query(url) == {
            "response_type": ["code"],
            "client_id": ["client-123"],
            "redirect_uri": ["http://localhost:53124"],
            "state": ["s1"],
        }

    def test_optional_parameters(self):
        url = build_authorize_url(
            AUTHORIZE_ENDPOINT,
            "client-123",
            "http://localhost:53124",
            "s1",
            resource="https://management.example.com/",
            scope="openid offline_access",
            prompt="select_account",
            extra_params={"login_hint": "user@example.com"},
        )
        query = _query(url)

        assert query["resource"] == ["https://management.example.com/"]
        assert query["scope"] == ["openid offline_access"]
        assert query["prompt"] == ["select_account"]
        assert query["login_hint"] == ["user@example.com"]

    def test_redirect_uri_is_encoded(self):
        url = build_authorize_url(AUTHORIZE_ENDPOINT, "c", "http://localhost:53124", "s1")

        assert "redirect_uri=http%3A%2F%2Flocalhost%3A53124" in url

    def test_keeps_existing_query(self):
        url = build_authorize_url(
            AUTHORIZE_ENDPOINT + "?tenant=common", "c", "http://localhost:1", "s1"
        )

        assert _query(url)["tenant"] == ["common"]
        assert _query(url)["state"] == ["s1"]

    def test_requires_https_endpoint(self):
        with pytest.raises(ValidationError):
            build_authorize_url("http://login.example.com", "c", "http://localhost:1", "s1")

    def test_requires_state(self):
        with pytest.raises(ValidationError):
            build_authorize_url(AUTHORIZE_ENDPOINT, "c", "http://localhost:1", "")

    def test_requires_client_id(self):
        with pytest.raises(ValidationError):
            build_authorize_url(AUTHORIZE_ENDPOINT, "", "http://localhost:1", "s1")
