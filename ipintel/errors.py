"""
Exception types raised by the ipinfo.io client.

Every error carries a short machine-readable ``code`` so callers can branch
on the failure category without inspecting messages.
"""

from typing import Iterable, List, Optional


class IPInfoError(Exception):
    """Base class for all client errors."""

    code = 'ipinfo_error'


class InvalidIPError(IPInfoError, ValueError):
    """Raised when an IP address is malformed or a bogon. No request is made."""

    code = 'invalid_ip'

    def __init__(self, ip: str, message: Optional[str] = None):
        self.ip = ip
        super().__init__(message or f"Invalid or bogon IP address: {ip}")


class InvalidIPsError(IPInfoError, ValueError):
    """Raised when no address in a batch survives validation."""

    code = 'invalid_ips'

    def __init__(self, ips: Iterable[str]):
        self.ips: List[str] = list(ips)
        super().__init__("No valid IPs provided for lookup")


class ApiError(IPInfoError):
    """Transport failure, non-200 status, or an error reported in the body."""

    code = 'api_error'

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class DecodeError(IPInfoError):
    """The response body could not be decoded into the expected shape."""

    code = 'json_error'

    def __init__(self, message: str = "Failed to parse IPInfo API response"):
        super().__init__(message)
