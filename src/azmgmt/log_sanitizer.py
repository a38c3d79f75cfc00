"""Log sanitization module for preventing secret leakage.

Pattern-based redaction of sensitive data in logs and error messages:
- Batch account keys (primary/secondary)
- Client secrets and passwords
- Access tokens and Authorization headers
- Shared-key signatures in request URLs

Security Controls:
- Account keys are never logged or shown in error messages
- Error messages surfaced by the CLI are sanitized first
"""

import re
from re import Pattern
from typing import Any


class LogSanitizer:
    """Sanitize sensitive data from logs and error messages.

    All methods are class methods and can be called without instantiation.
    """

    REDACTED = "[REDACTED]"

    # Order matters: more specific patterns come first
    SECRET_PATTERNS: dict[str, Pattern] = {
        "account_key": re.compile(
            r'((?:primary|secondary)[_-]?(?:account[_-]?)?key["\']?\s*[:=]\s*["\']?)([^\s"\'&,\)]+)',
            re.IGNORECASE,
        ),
        "shared_key_header": re.compile(r"(Authorization:\s*SharedKey\s+)([^\s]+)", re.IGNORECASE),
        "authorization_bearer": re.compile(r"(Authorization:\s*Bearer\s+)([^\s]+)", re.IGNORECASE),
        "client_secret_assignment": re.compile(
            r'(client[_-]?secret["\']?\s*[:=]\s*["\']?)([^\s"\'&,\)]+)',
            re.IGNORECASE,
        ),
        "client_secret_env": re.compile(
            r"(AZURE_CLIENT_SECRET[\"']?\s*[:=]\s*[\"']?)([^\s\"'&,\)]+)",
            re.IGNORECASE,
        ),
        "password": re.compile(r'(password["\']?\s*[:=]\s*["\']?)([^\s"\'&,\)]+)', re.IGNORECASE),
        "access_token": re.compile(
            r'(access[_-]?token["\']?\s*[:=]\s*["\']?)([^\s"\'&,\)]+)',
            re.IGNORECASE,
        ),
        "sas_signature": re.compile(r"([?&]sig=)([^&\s]+)", re.IGNORECASE),
    }

    @classmethod
    def sanitize(cls, message: Any) -> str:
        """Sanitize message by redacting sensitive patterns.

        Args:
            message: The message to sanitize (non-strings are converted)

        Returns:
            Sanitized message with secrets replaced by [REDACTED]

        Examples:
            >>> LogSanitizer.sanitize("primary_key=abc123")
            'primary_key=[REDACTED]'
        """
        if not isinstance(message, str):
            message = str(message)

        result = message
        for pattern in cls.SECRET_PATTERNS.values():
            result = pattern.sub(r"\1" + cls.REDACTED, result)
        return result

    @classmethod
    def create_safe_error_message(cls, error: Exception, context: str = "") -> str:
        """Create error message with secrets sanitized.

        Args:
            error: The exception to sanitize
            context: Optional context string to prepend

        Returns:
            Sanitized error message
        """
        sanitized_msg = cls.sanitize(str(error))
        if context:
            return f"{context}: {sanitized_msg}"
        return sanitized_msg


__all__ = ["LogSanitizer"]
