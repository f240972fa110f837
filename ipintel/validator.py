"""
IP address validation utilities.

This module validates IPv4 and IPv6 addresses and tests them against a fixed
table of bogon networks (private, loopback, documentation and other ranges
that are never routed on the public internet). Only addresses passing
``is_valid_for_lookup`` are ever sent to the API.
"""

import ipaddress
from typing import Optional, Tuple, Union


BOGON_NETWORKS: Tuple[str, ...] = (
    # IPv4 bogons
    "0.0.0.0/8",
    "10.0.0.0/8",
    "100.64.0.0/10",
    "127.0.0.0/8",
    "169.254.0.0/16",
    "172.16.0.0/12",
    "192.0.0.0/24",
    "192.0.2.0/24",
    "192.168.0.0/16",
    "198.18.0.0/15",
    "198.51.100.0/24",
    "203.0.113.0/24",
    "224.0.0.0/4",
    "240.0.0.0/4",
    "255.255.255.255/32",
    # IPv6 bogons
    "::/128",
    "::1/128",
    "::ffff:0:0/96",
    "::/96",
    "100::/64",
    "2001:10::/28",
    "2001:db8::/32",
    "fc00::/7",
    "fe80::/10",
    "fec0::/10",
    "ff00::/8",
    # 6to4 encapsulations of IPv4 bogons
    "2002::/24",
    "2002:a00::/24",
    "2002:7f00::/24",
    "2002:a9fe::/32",
    "2002:ac10::/28",
    "2002:c000::/40",
    "2002:c000:200::/40",
    "2002:c0a8::/32",
    "2002:c612::/31",
    "2002:c633:6400::/40",
    "2002:cb00:7100::/40",
    "2002:e000::/20",
    "2002:f000::/20",
    "2002:ffff:ffff::/48",
    # Teredo encapsulations of IPv4 bogons
    "2001::/40",
    "2001:0:a00::/40",
    "2001:0:7f00::/40",
    "2001:0:a9fe::/48",
    "2001:0:ac10::/44",
    "2001:0:c000::/56",
    "2001:0:c000:200::/56",
    "2001:0:c0a8::/48",
    "2001:0:c612::/47",
    "2001:0:c633:6400::/56",
    "2001:0:cb00:7100::/56",
    "2001:0:e000::/36",
    "2001:0:f000::/36",
    "2001:0:ffff:ffff::/64",
)


class IPValidator:
    """Validator for IP addresses and bogon ranges."""

    def is_valid(self, ip_string: str) -> bool:
        """
        Validate if a string represents a valid IP address.

        Args:
            ip_string: String representation of an IP address

        Returns:
            True if valid IPv4 or IPv6 address, False otherwise
        """
        return self._parse(ip_string) is not None

    def is_ipv4(self, ip_string: str) -> bool:
        """
        Check if string represents a valid IPv4 address.

        Args:
            ip_string: String representation of an IP address

        Returns:
            True if valid IPv4 address, False otherwise
        """
        return isinstance(self._parse(ip_string), ipaddress.IPv4Address)

    def is_ipv6(self, ip_string: str) -> bool:
        """
        Check if string represents a valid IPv6 address.

        Args:
            ip_string: String representation of an IP address

        Returns:
            True if valid IPv6 address, False otherwise
        """
        return isinstance(self._parse(ip_string), ipaddress.IPv6Address)

    def normalize_ip(self, ip_string: str) -> str:
        """
        Normalize IP address to standard format.

        Args:
            ip_string: String representation of an IP address

        Returns:
            Normalized IP address string

        Raises:
            ValueError: If IP address is invalid
        """
        ip_obj = self._parse(ip_string)
        if ip_obj is None:
            raise ValueError(f"Invalid IP address: {ip_string}")
        return str(ip_obj)

    def is_bogon(self, ip_string: str) -> bool:
        """
        Check if an IP address falls inside any bogon network.

        Args:
            ip_string: String representation of an IP address

        Returns:
            True if the address is a bogon, False otherwise
        """
        return any(self.in_range(ip_string, network) for network in BOGON_NETWORKS)

    def in_range(self, ip_string: str, cidr: str) -> bool:
        """
        Check if an IP address lies within a CIDR range.

        Both addresses are compared in packed binary form under a mask of
        ``prefixlen`` leading one-bits. Invalid input and mixed address
        families never match.

        Args:
            ip_string: String representation of an IP address
            cidr: Range in ``subnet/prefixlen`` notation

        Returns:
            True if the address is inside the range, False otherwise
        """
        ip_obj = self._parse(ip_string)
        if ip_obj is None:
            return False

        subnet, _, bits = str(cidr).partition('/')
        subnet_obj = self._parse(subnet)
        if subnet_obj is None or subnet_obj.version != ip_obj.version:
            return False

        try:
            prefixlen = int(bits)
        except ValueError:
            return False

        ip_packed = ip_obj.packed
        subnet_packed = subnet_obj.packed
        width = len(ip_packed) * 8
        if prefixlen < 0 or prefixlen > width:
            return False

        mask = ((1 << prefixlen) - 1) << (width - prefixlen)
        ip_int = int.from_bytes(ip_packed, 'big')
        subnet_int = int.from_bytes(subnet_packed, 'big')

        return (ip_int & mask) == (subnet_int & mask)

    def is_valid_for_lookup(self, ip_string: str) -> bool:
        """
        Check if an IP address may be sent to the API.

        Args:
            ip_string: String representation of an IP address

        Returns:
            True if the address is valid and not a bogon
        """
        return self.is_valid(ip_string) and not self.is_bogon(ip_string)

    def get_bogon_networks(self) -> Tuple[str, ...]:
        """Return the bogon CIDR table."""
        return BOGON_NETWORKS

    def _parse(self, ip_string: str) -> Optional[Union[ipaddress.IPv4Address, ipaddress.IPv6Address]]:
        """Parse an address string, returning None when it is not an IP."""
        if not isinstance(ip_string, str):
            return None
        try:
            ip_obj = ipaddress.ip_address(ip_string.strip())
        except ValueError:
            return None
        # Zone-scoped IPv6 (fe80::1%eth0) is host-local, not a lookup target
        if getattr(ip_obj, 'scope_id', None) is not None:
            return None
        return ip_obj


# Global validator instance
validator = IPValidator()
