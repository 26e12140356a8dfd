"""Unit tests for validation helpers and ListenerSettings."""

import socket

import pytest

from loopback_redirect.core.redirect import ListenerSettings, ValidationError
from loopback_redirect.core.redirect.validation import (
    validate_loopback_address,
    validate_port,
    validate_range,
    validate_string,
    validate_url,
)


class TestValidatePort:
    @pytest.mark.parametrize("port", [0, 1024, 8400, 65535])
    def test_valid(self, port):
        validate_port(port)

    @pytest.mark.parametrize("port", [1, 80, 1023, 65536, -1])
    def test_invalid(self, port):
        with pytest.raises(ValidationError) as exc_info:
            validate_port(port)

        assert exc_info.value.field == "port"

    def test_rejects_bool(self):
        with pytest.raises(ValidationError):
            validate_port(True)  # type: ignore[arg-type]

    def test_rejects_string(self):
        with pytest.raises(ValidationError):
            validate_port("8080")  # type: ignore[arg-type]


class TestValidateString:
    def test_non_empty(self):
        assert validate_string("s1", "state") == "s1"

    def test_empty(self):
        with pytest.raises(ValidationError, match="non-empty"):
            validate_string("", "state")

    def test_allow_empty(self):
        assert validate_string("", "state", allow_empty=True) == ""

    def test_wrong_type(self):
        with pytest.raises(ValidationError, match="must be str"):
            validate_string(None, "state")


class TestValidateRange:
    def test_accepts_float(self):
        validate_range(0.5, "timeout", min_value=0.1)

    def test_below_minimum(self):
        with pytest.raises(ValidationError, match="at least"):
            validate_range(0, "timeout", min_value=1)

    def test_above_maximum(self):
        with pytest.raises(ValidationError, match="at most"):
            validate_range(4000, "timeout", max_value=3600)


class TestValidateUrl:
    def test_valid(self):
        assert validate_url("https://login.example.com/authorize", "url", require_https=True)

    def test_http_when_https_required(self):
        with pytest.raises(ValidationError, match="HTTPS"):
            validate_url("http://login.example.com", "url", require_https=True)

    @pytest.mark.parametrize("value", ["not a url", "/relative/path", "ftp://example.com"])
    def test_malformed(self, value):
        with pytest.raises(ValidationError):
            validate_url(value, "url")


class TestValidateLoopbackAddress:
    @pytest.mark.parametrize("address", ["127.0.0.1", "127.0.0.2", "::1"])
    def test_loopback(self, address):
        assert validate_loopback_address(address) == address

    @pytest.mark.parametrize("address", ["0.0.0.0", "192.168.1.10", "::"])
    def test_not_loopback(self, address):
        with pytest.raises(ValidationError, match="loopback"):
            validate_loopback_address(address)

    def test_host_name_rejected(self):
        with pytest.raises(ValidationError, match="literal IP"):
            validate_loopback_address("localhost")


class TestListenerSettings:
    def test_defaults(self):
        settings = ListenerSettings()

        assert settings.bind_address == "127.0.0.1"
        assert settings.redirect_host == "localhost"
        assert settings.port == 0
        assert settings.landing_url is None
        assert settings.address_family == socket.AF_INET

    def test_ipv6_address_family(self):
        assert ListenerSettings(bind_address="::1").address_family == socket.AF_INET6

    def test_rejects_public_bind_address(self):
        with pytest.raises(ValidationError):
            ListenerSettings(bind_address="0.0.0.0")

    def test_rejects_privileged_port(self):
        with pytest.raises(ValidationError):
            ListenerSettings(port=443)

    def test_rejects_bad_landing_url(self):
        with pytest.raises(ValidationError):
            ListenerSettings(landing_url="docs")

    def test_rejects_zero_request_timeout(self):
        with pytest.raises(ValidationError):
            ListenerSettings(request_timeout=0)
