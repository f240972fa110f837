"""
Unit tests for IP address validator.
"""

import pytest
from ipintel.validator import IPValidator, BOGON_NETWORKS


class TestIPValidator:
    """Test cases for IPValidator class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.validator = IPValidator()

    def test_valid_ipv4_addresses(self):
        """Test validation of valid IPv4 addresses."""
        valid_ipv4 = [
            "192.168.1.1",
            "8.8.8.8",
            "1.1.1.1",
            "10.0.0.1",
            "172.16.0.1",
            "255.255.255.255",
            "0.0.0.0"
        ]

        for ip in valid_ipv4:
            assert self.validator.is_valid(ip), f"IPv4 {ip} should be valid"
            assert self.validator.is_ipv4(ip), f"{ip} should be recognized as IPv4"
            assert not self.validator.is_ipv6(ip), f"{ip} should not be recognized as IPv6"

    def test_valid_ipv6_addresses(self):
        """Test validation of valid IPv6 addresses."""
        valid_ipv6 = [
            "2001:0db8:85a3:0000:0000:8a2e:0370:7334",
            "2001:db8:85a3::8a2e:370:7334",
            "::1",
            "::",
            "2001:db8::1",
            "2606:4700:4700::1111"
        ]

        for ip in valid_ipv6:
            assert self.validator.is_valid(ip), f"IPv6 {ip} should be valid"
            assert self.validator.is_ipv6(ip), f"{ip} should be recognized as IPv6"
            assert not self.validator.is_ipv4(ip), f"{ip} should not be recognized as IPv4"

    def test_invalid_ip_addresses(self):
        """Test validation of invalid IP addresses."""
        invalid_ips = [
            "256.256.256.256",
            "192.168.1",
            "192.168.1.1.1",
            "not_an_ip",
            "",
            "192.168.1.256",
            "2001:0db8:85a3::8a2e::7334",
            "gggg::1",
            "192.168.1.-1",
            None,
            12345
        ]

        for ip in invalid_ips:
            assert not self.validator.is_valid(ip), f"{ip} should be invalid"
            assert not self.validator.is_ipv4(ip), f"{ip} should not be valid IPv4"
            assert not self.validator.is_ipv6(ip), f"{ip} should not be valid IPv6"

    def test_ip_normalization(self):
        """Test IP address normalization."""
        test_cases = [
            ("192.168.1.1", "192.168.1.1"),
            ("  192.168.1.1  ", "192.168.1.1"),
            ("2001:0db8:85a3:0000:0000:8a2e:0370:7334", "2001:db8:85a3::8a2e:370:7334"),
            ("::1", "::1")
        ]

        for input_ip, expected in test_cases:
            assert self.validator.normalize_ip(input_ip) == expected, f"Normalization of {input_ip} failed"

    def test_normalize_invalid_ip(self):
        """Test normalization of invalid IP addresses raises ValueError."""
        for ip in ["not_an_ip", "256.256.256.256", ""]:
            with pytest.raises(ValueError):
                self.validator.normalize_ip(ip)

    def test_in_range(self):
        """Test CIDR membership."""
        assert self.validator.in_range("192.168.1.5", "192.168.0.0/16")
        assert not self.validator.in_range("192.169.1.5", "192.168.0.0/16")
        assert self.validator.in_range("10.255.255.255", "10.0.0.0/8")
        assert self.validator.in_range("100.127.0.1", "100.64.0.0/10")
        assert not self.validator.in_range("100.128.0.1", "100.64.0.0/10")
        assert self.validator.in_range("2001:db8::abcd", "2001:db8::/32")
        assert not self.validator.in_range("2001:db9::1", "2001:db8::/32")

    def test_in_range_boundaries(self):
        """Test zero-length and full-length prefixes."""
        assert self.validator.in_range("8.8.8.8", "0.0.0.0/0")
        assert self.validator.in_range("255.255.255.255", "255.255.255.255/32")
        assert not self.validator.in_range("255.255.255.254", "255.255.255.255/32")
        assert self.validator.in_range("::1", "::1/128")

    def test_in_range_fails_closed(self):
        """Test that malformed input never matches."""
        assert not self.validator.in_range("not-an-ip", "10.0.0.0/8")
        assert not self.validator.in_range("10.0.0.1", "not-a-subnet/8")
        assert not self.validator.in_range("10.0.0.1", "10.0.0.0/abc")
        assert not self.validator.in_range("10.0.0.1", "10.0.0.0/33")
        assert not self.validator.in_range("10.0.0.1", "10.0.0.0/-1")

    def test_in_range_mixed_families(self):
        """Test that IPv4 and IPv6 are never compared."""
        assert not self.validator.in_range("10.0.0.1", "::/0")
        assert not self.validator.in_range("::1", "0.0.0.0/0")
        assert not self.validator.in_range("127.0.0.1", "::1/128")

    def test_bogon_detection(self):
        """Test detection of bogon addresses."""
        bogons = [
            "127.0.0.1",
            "10.0.0.5",
            "172.16.0.1",
            "192.168.1.1",
            "169.254.1.1",
            "100.64.0.1",
            "192.0.2.10",
            "198.51.100.7",
            "203.0.113.9",
            "224.0.0.1",
            "255.255.255.255",
            "0.0.0.0",
            "::1",
            "::",
            "fe80::1",
            "fc00::1",
            "2001:db8::1",
            "ff02::1",
            "2002:c0a8:101::1",
        ]

        for ip in bogons:
            assert self.validator.is_bogon(ip), f"{ip} should be a bogon"
            assert not self.validator.is_valid_for_lookup(ip), f"{ip} should not be looked up"

    def test_public_addresses_valid_for_lookup(self):
        """Test that routable addresses pass the lookup gate."""
        public = [
            "8.8.8.8",
            "1.1.1.1",
            "208.67.222.222",
            "2001:4860:4860::8888",
            "2606:4700:4700::1111",
        ]

        for ip in public:
            assert not self.validator.is_bogon(ip), f"{ip} should not be a bogon"
            assert self.validator.is_valid_for_lookup(ip), f"{ip} should be valid for lookup"

    def test_invalid_ip_not_valid_for_lookup(self):
        """Test that malformed strings fail the lookup gate."""
        for ip in ["not_an_ip", "", "999.1.1.1"]:
            assert not self.validator.is_bogon(ip)
            assert not self.validator.is_valid_for_lookup(ip)

    def test_bogon_table(self):
        """Test the bogon table contents."""
        networks = self.validator.get_bogon_networks()
        assert networks is BOGON_NETWORKS
        assert "10.0.0.0/8" in networks
        assert "fe80::/10" in networks
        assert len(set(networks)) == len(networks)

    def test_whitespace_handling(self):
        """Test handling of whitespace in IP addresses."""
        test_cases = [
            "  8.8.8.8  ",
            "\t8.8.8.8\n",
            " 2001:4860:4860::8888 "
        ]

        for ip in test_cases:
            assert self.validator.is_valid(ip), f"IP with whitespace should be valid: '{ip}'"
            assert self.validator.is_valid_for_lookup(ip)
            assert self.validator.normalize_ip(ip) == ip.strip()

    @pytest.mark.parametrize("ip", [
        "2001:4860:4860::8888%eth0",
        "fe80::1%1",
        "2606:4700:4700::1111%25en0",
    ])
    def test_scoped_ipv6_rejected(self, ip):
        """Test that IPv6 addresses carrying a zone index are not accepted."""
        assert not self.validator.is_valid(ip)
        assert not self.validator.is_ipv6(ip)
        assert not self.validator.is_valid_for_lookup(ip)
        with pytest.raises(ValueError):
            self.validator.normalize_ip(ip)
