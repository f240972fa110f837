"""
Security utilities for ipintel.

Keeps the bearer token out of error messages and logs, and neutralizes
markup and control characters in API-supplied text before it is printed.
"""

import re
import html
from typing import Optional

REDACTED = '[REDACTED]'

SECRET_PATTERNS = [
    re.compile(r'api[_\s-]*key[:\s=]+[\w\-]{8,}', re.IGNORECASE),
    re.compile(r'token[:\s=]+[\w\-]{8,}', re.IGNORECASE),
    re.compile(r'authorization[:\s=]+[\w\-]{8,}', re.IGNORECASE),
    re.compile(r'bearer\s+[\w\-]{8,}', re.IGNORECASE),
]

SOURCE_PATH = re.compile(r'/[a-zA-Z0-9/_\-\.]+\.py')

MAX_ERROR_LENGTH = 500


class SecurityValidator:
    """Sanitization for error messages and API output."""

    def sanitize_output_text(self, text: str, max_length: int = 1000) -> str:
        """
        Make API-supplied text safe to print on a terminal.

        Args:
            text: Text to sanitize
            max_length: Maximum length kept before escaping

        Returns:
            HTML-escaped text with control characters shown as ``\\xNN``
        """
        if not text:
            return ""

        escaped = html.escape(str(text)[:max_length], quote=True)
        return "".join(
            char if char.isprintable() or char in ' \t\n' else f"\\x{ord(char):02x}"
            for char in escaped
        )

    def redact_token(self, text: str, token: Optional[str]) -> str:
        """Replace every verbatim occurrence of ``token`` in ``text``."""
        if not token:
            return text
        return text.replace(token, REDACTED)

    def sanitize_error_message(self, error_msg: str, token: Optional[str] = None) -> str:
        """
        Strip credentials and source paths from an error message.

        Args:
            error_msg: Original error message
            token: Known API token to scrub wherever it appears

        Returns:
            Message safe to log or raise
        """
        sanitized = self.redact_token(str(error_msg), token)

        for pattern in SECRET_PATTERNS:
            sanitized = pattern.sub(REDACTED, sanitized)

        sanitized = SOURCE_PATH.sub('[PATH]', sanitized)
        return sanitized[:MAX_ERROR_LENGTH]


# Global security validator instance
security = SecurityValidator()
