"""
Tests for utility functions.
"""

import pytest

from creativebuilder.core.logging_config import redact_sensitive_data
from creativebuilder.core.utils import (
    build_data_url,
    decode_data_url,
    extension_for_mime_type,
    parse_data_url,
    sanitize_filename
)


class TestDataUrls:

    def test_parse_data_url(self):
        assert parse_data_url("data:image/png;base64,aGVsbG8=") == ("image/png", "aGVsbG8=")

    def test_decode_data_url(self):
        assert decode_data_url(build_data_url("aGVsbG8=", "image/jpeg")) == ("image/jpeg", b"hello")

    @pytest.mark.parametrize("url", ["https://example.com/a.png", "data:image/png,raw", "data:image/png;base64"])
    def test_parse_rejects_non_base64_data_urls(self, url):
        with pytest.raises(ValueError):
            parse_data_url(url)


class TestFileHelpers:

    @pytest.mark.parametrize("mime_type, extension", [
        ("image/jpeg", "jpg"),
        ("image/png", "png"),
        ("application/x-unknown-thing", "bin"),
    ])
    def test_extension_for_mime_type(self, mime_type, extension):
        assert extension_for_mime_type(mime_type) == extension

    def test_sanitize_filename(self):
        assert sanitize_filename('creative 1: "a/b"') == "creative_1___a_b_"


def test_redact_sensitive_data_is_recursive():
    data = {"api_key": "secret", "nested": {"token": "abc", "model": "m"}, "prompt": "hi"}

    redacted = redact_sensitive_data(data)

    assert redacted["api_key"] == "********"
    assert redacted["nested"] == {"token": "********", "model": "m"}
    assert redacted["prompt"] == "hi"
    assert data["api_key"] == "secret"
