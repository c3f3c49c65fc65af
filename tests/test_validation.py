"""
Tests for the validation module.

Covers: record target validation, mask_key, domain, subdomain and
email address validation.

Copyright (c) 2026 Snapp'
Author: Yannis Duvignau (yduvignau@snapp.fr)
"""

import pytest

from ovh_async.validation import (
    mask_key,
    validate_domain,
    validate_email,
    validate_record_target,
    validate_subdomain,
)


# ========= Record target validation ============


class TestValidateRecordTarget:
    """Tests for validate_record_target."""

    @pytest.mark.parametrize("record_type,target", [
        ("A", "1.2.3.4"),
        ("AAAA", "2001:db8::1"),
        ("CNAME", "host.example.com."),
        ("NS", "dns1.example.net."),
        ("MX", "10 mail.example.com."),
        ("SRV", "10 60 5060 sip.example.com."),
        ("TXT", "v=spf1 include:example.com ~all"),
        ("CAA", '0 issue "letsencrypt.org"'),
    ])
    def test_valid_targets(self, record_type, target):
        valid, msg = validate_record_target(record_type, target)
        assert valid is True
        assert msg == ""

    def test_a_record_rejects_ipv6(self):
        valid, msg = validate_record_target("A", "::1")
        assert valid is False
        assert "IPv4" in msg

    def test_a_record_rejects_garbage(self):
        valid, msg = validate_record_target("A", "999.999.999.999")
        assert valid is False
        assert msg == "Invalid IPv4 address"

    def test_aaaa_record_rejects_ipv4(self):
        valid, msg = validate_record_target("AAAA", "1.2.3.4")
        assert valid is False
        assert "IPv6" in msg

    def test_cname_missing_trailing_dot(self):
        valid, msg = validate_record_target("CNAME", "host.example.com")
        assert valid is False
        assert "dot" in msg.lower()

    def test_mx_missing_priority(self):
        valid, msg = validate_record_target("MX", "mail.example.com.")
        assert valid is False

    def test_mx_invalid_priority(self):
        valid, msg = validate_record_target("MX", "abc mail.example.com.")
        assert valid is False
        assert "number" in msg

    def test_mx_priority_out_of_range(self):
        valid, msg = validate_record_target("MX", "70000 mail.example.com.")
        assert valid is False
        assert "between 0 and 65535" in msg

    def test_srv_too_few_parts(self):
        valid, msg = validate_record_target("SRV", "10 60 5060")
        assert valid is False

    def test_srv_port_out_of_range(self):
        valid, msg = validate_record_target("SRV", "10 60 99999 sip.example.com.")
        assert valid is False
        assert msg == "SRV port must be between 0 and 65535"

    def test_empty_target(self):
        valid, msg = validate_record_target("TXT", "   ")
        assert valid is False
        assert msg == "Target cannot be empty"


# ========= mask_key ============


class TestMaskKey:
    """Tests for the mask_key helper."""

    def test_long_key(self):
        assert mask_key("abcdefgh1234") == "***1234"

    def test_exactly_five_chars(self):
        assert mask_key("abcde") == "***bcde"

    def test_four_chars(self):
        assert mask_key("abcd") == "***"

    def test_empty_key(self):
        assert mask_key("") == "***"


# ========= validate_domain ============


class TestValidateDomain:
    """Tests for domain validation."""

    @pytest.mark.parametrize("domain", [
        "example.com",
        "sub.example.com",
        "my-domain.co.uk",
        "a.io",
    ])
    def test_valid_domains(self, domain):
        assert validate_domain(domain) is True

    @pytest.mark.parametrize("domain", [
        "",
        "localhost",
        "-bad.com",
        "no spaces.com",
        "a" * 64 + ".com",  # label too long
    ])
    def test_invalid_domains(self, domain):
        assert validate_domain(domain) is False


# ========= validate_subdomain ============


class TestValidateSubdomain:
    """Tests for subdomain validation."""

    @pytest.mark.parametrize("subdomain", [
        "www",
        "my-app",
        "sub.domain",
        "_dmarc",
        "_sip._tcp",
        "",
        "@",
    ])
    def test_valid_subdomains(self, subdomain):
        assert validate_subdomain(subdomain) is True

    @pytest.mark.parametrize("subdomain", [
        "-invalid",
        "invalid-",
        "has space",
        "a" * 64,  # label too long
    ])
    def test_invalid_subdomains(self, subdomain):
        assert validate_subdomain(subdomain) is False


# ========= validate_email ============


class TestValidateEmail:
    """Tests for email address validation."""

    @pytest.mark.parametrize("address", [
        "foo@example.com",
        "first.last+tag@mail.example.org",
    ])
    def test_valid_addresses(self, address):
        assert validate_email(address) is True

    @pytest.mark.parametrize("address", [
        "",
        "foo",
        "@example.com",
        "foo@localhost",
        "foo bar@example.com",
    ])
    def test_invalid_addresses(self, address):
        assert validate_email(address) is False
