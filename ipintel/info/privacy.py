"""
Privacy detection and abuse contact views (Business plan and above).
"""

from typing import Optional

from .base import InfoView


class Privacy(InfoView):
    """Anonymization signals for an address."""

    @property
    def is_vpn(self) -> bool:
        return self._get_bool('vpn')

    @property
    def is_proxy(self) -> bool:
        return self._get_bool('proxy')

    @property
    def is_tor(self) -> bool:
        return self._get_bool('tor')

    @property
    def is_relay(self) -> bool:
        return self._get_bool('relay')

    @property
    def is_hosting(self) -> bool:
        return self._get_bool('hosting')

    @property
    def service(self) -> Optional[str]:
        """Name of the VPN or privacy service, when known."""
        return self._get_str('service')

    @property
    def is_anonymous(self) -> bool:
        """True if any of the VPN, proxy, Tor or relay flags is set."""
        return self.is_vpn or self.is_proxy or self.is_tor or self.is_relay


class Abuse(InfoView):
    """Abuse contact for the network an address belongs to."""

    @property
    def address(self) -> Optional[str]:
        return self._get_str('address')

    @property
    def country(self) -> Optional[str]:
        return self._get_str('country')

    @property
    def email(self) -> Optional[str]:
        return self._get_str('email')

    @property
    def name(self) -> Optional[str]:
        return self._get_str('name')

    @property
    def network(self) -> Optional[str]:
        return self._get_str('network')

    @property
    def phone(self) -> Optional[str]:
        return self._get_str('phone')
