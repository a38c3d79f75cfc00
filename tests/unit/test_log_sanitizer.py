"""Unit tests for log_sanitizer module."""

import pytest

from azmgmt.log_sanitizer import LogSanitizer


class TestLogSanitizer:
    """Tests for LogSanitizer."""

    @pytest.mark.parametrize(
        "message,secret",
        [
            ("primary_key=abc123", "abc123"),
            ('{"secondaryAccountKey": "zzz999"}', "zzz999"),
            ("Authorization: SharedKey acct:c2lnbmF0dXJl", "acct:c2lnbmF0dXJl"),
            ("Authorization: Bearer eyJ0eXAi", "eyJ0eXAi"),
            ("client_secret=s3cr3t", "s3cr3t"),
            ("AZURE_CLIENT_SECRET=s3cr3t", "s3cr3t"),
            ("password: hunter2", "hunter2"),
            ("access_token=tok123", "tok123"),
            ("https://x.blob.core.windows.net/c?sv=1&sig=abcdef", "abcdef"),
        ],
    )
    def test_redacts_secrets(self, message, secret):
        result = LogSanitizer.sanitize(message)
        assert secret not in result
        assert LogSanitizer.REDACTED in result

    def test_plain_message_unchanged(self):
        message = "Batch account not found: mybatch"
        assert LogSanitizer.sanitize(message) == message

    def test_non_string_converted(self):
        assert LogSanitizer.sanitize(42) == "42"

    def test_create_safe_error_message_with_context(self):
        error = ValueError("password=hunter2")
        assert (
            LogSanitizer.create_safe_error_message(error, "Login failed")
            == "Login failed: password=[REDACTED]"
        )

    def test_create_safe_error_message_without_context(self):
        assert LogSanitizer.create_safe_error_message(ValueError("boom")) == "boom"
