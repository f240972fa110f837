"""
Network ownership views: ASN, company and hosted domains.

ASN data is returned from the Basic plan upward, company data from Business,
and domains only on Premium.
"""

from typing import List, Optional

from .base import InfoView


class ASN(InfoView):
    """Autonomous System information."""

    @property
    def asn(self) -> Optional[str]:
        """AS number, e.g. ``AS15169``."""
        return self._get_str('asn')

    @property
    def name(self) -> Optional[str]:
        return self._get_str('name')

    @property
    def domain(self) -> Optional[str]:
        return self._get_str('domain')

    @property
    def route(self) -> Optional[str]:
        """Announced prefix containing the address."""
        return self._get_str('route')

    @property
    def type(self) -> Optional[str]:
        """Network type: isp, business, hosting or education."""
        return self._get_str('type')


class Company(InfoView):
    """Organization that operates the address."""

    @property
    def name(self) -> Optional[str]:
        return self._get_str('name')

    @property
    def domain(self) -> Optional[str]:
        return self._get_str('domain')

    @property
    def type(self) -> Optional[str]:
        return self._get_str('type')


class Domains(InfoView):
    """Domains hosted on the address."""

    @property
    def ip(self) -> Optional[str]:
        return self._get_str('ip')

    @property
    def total(self) -> int:
        return self._get_int('total')

    @property
    def page(self) -> int:
        return self._get_int('page')

    @property
    def domains(self) -> List[str]:
        value = self._get('domains', [])
        return list(value) if isinstance(value, (list, tuple)) else []
