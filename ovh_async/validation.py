"""
Input validation utilities for ovh-async.

Provides validation functions for domains, subdomains, email addresses
and DNS record targets, and a helper to mask API keys before they reach
a log line or the terminal.

Copyright (c) 2026 Snapp'
Author: Yannis Duvignau (yduvignau@snapp.fr)
"""

import ipaddress

from ovh_async.constants import DOMAIN_REGEX, EMAIL_LOCAL_REGEX, SUBDOMAIN_REGEX


def mask_key(key: str) -> str:
    """
    Mask a sensitive key, showing only the last 4 characters.

    Parameters:
        key: The key to mask

    Returns:
        The masked key (e.g. "***abcd")
    """
    if len(key) <= 4:
        return "***"
    return "***" + key[-4:]


def validate_domain(domain: str) -> bool:
    """Validate a domain name against RFC 1123."""
    return bool(DOMAIN_REGEX.match(domain))


def validate_subdomain(subdomain: str) -> bool:
    """
    Validate a subdomain.

    An empty subdomain or "@" designates the zone apex and is valid.
    """
    if not subdomain or subdomain == "@":
        return True
    return bool(SUBDOMAIN_REGEX.match(subdomain))


def validate_email(address: str) -> bool:
    """Validate a single ``local@domain`` email address."""
    local, sep, domain = address.rpartition("@")
    if not sep or not local:
        return False
    return bool(EMAIL_LOCAL_REGEX.match(local)) and validate_domain(domain)


def _check_ip(target: str, version: int) -> str:
    try:
        ip_obj = ipaddress.ip_address(target)
    except ValueError:
        return f"Invalid IPv{version} address"
    if ip_obj.version != version:
        record_type = "A" if version == 4 else "AAAA"
        return f"{record_type} record requires an IPv{version} address, got IPv{ip_obj.version}"
    return ""


def _check_ports(record_type: str, names: list[str], values: list[str]) -> str:
    try:
        for name, val in zip(names, values):
            num = int(val)
            if num < 0 or num > 65535:
                return f"{record_type} {name} must be between 0 and 65535"
    except ValueError:
        noun = "a number" if len(names) == 1 else "numbers"
        return f"{record_type} {', '.join(names)} must be {noun}"
    return ""


def validate_record_target(record_type: str, target: str) -> tuple[bool, str]:
    """
    Validate the target value based on the record type.

    Parameters:
        record_type: DNS record type (A, AAAA, CNAME, MX, SRV, ...)
        target: The target value to validate

    Returns:
        Tuple of (is_valid, error_message). error_message is empty if valid.
    """
    if not target.strip():
        return False, "Target cannot be empty"

    target = target.strip()
    error = ""

    if record_type == "A":
        error = _check_ip(target, 4)

    elif record_type == "AAAA":
        error = _check_ip(target, 6)

    elif record_type in ("CNAME", "DNAME", "NS", "PTR"):
        if not target.endswith("."):
            error = f"{record_type} target must be a FQDN ending with a dot (e.g. host.example.com.)"

    elif record_type == "MX":
        parts = target.split(maxsplit=1)
        if len(parts) != 2:
            error = "MX record must be 'priority target' (e.g. '10 mail.example.com.')"
        else:
            error = _check_ports("MX", ["priority"], parts[:1])

    elif record_type == "SRV":
        parts = target.split()
        if len(parts) != 4:
            error = "SRV record must be 'priority weight port target' (e.g. '10 60 5060 sip.example.com.')"
        else:
            error = _check_ports("SRV", ["priority", "weight", "port"], parts[:3])

    # Other types carry free-form text
    return not error, error
