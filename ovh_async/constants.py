"""
Constants used throughout the ovh-async package.

This module centralizes the API endpoint table, the authentication
header names, supported DNS record types, validation regexes, and
filesystem paths for configuration and credential storage.

Copyright (c) 2026 Snapp'
Author: Yannis Duvignau (yduvignau@snapp.fr)
"""

import os
import re
from pathlib import Path

# Known API endpoints, by region name
ENDPOINTS = {
    "ovh-eu": "https://eu.api.ovh.com/1.0",
    "ovh-us": "https://api.us.ovhcloud.com/1.0",
    "ovh-ca": "https://ca.api.ovh.com/1.0",
    "kimsufi-eu": "https://eu.api.kimsufi.com/1.0",
    "kimsufi-ca": "https://ca.api.kimsufi.com/1.0",
    "soyoustart-eu": "https://eu.api.soyoustart.com/1.0",
    "soyoustart-ca": "https://ca.api.soyoustart.com/1.0",
}

# Authentication headers
HEADER_APPLICATION = "X-Ovh-Application"
HEADER_CONSUMER = "X-Ovh-Consumer"
HEADER_TIMESTAMP = "X-Ovh-Timestamp"
HEADER_SIGNATURE = "X-Ovh-Signature"
HEADER_QUERY_ID = "X-Ovh-QueryID"

SIGNATURE_PREFIX = "$1$"

JSON_CONTENT_TYPE = "application/json; charset=utf-8"

# HTTP timeout in seconds
DEFAULT_TIMEOUT = 180.0

# Credential keys, in the order they appear in ovh.conf and .env files
CONFIG_KEYS = ("endpoint", "application_key", "application_secret", "consumer_key")

# Supported DNS record types for the typed DNS bindings
SUPPORTED_RECORD_TYPES = [
    "A", "AAAA", "CAA", "CNAME", "DKIM", "DMARC", "DNAME", "LOC", "MX",
    "NAPTR", "NS", "PTR", "SPF", "SRV", "SSHFP", "TLSA", "TXT",
]

# Regex for validating domain names (RFC 1123 compliant)
DOMAIN_REGEX = re.compile(
    r"^(?!-)[A-Za-z0-9-]{1,63}(?<!-)(\.[A-Za-z0-9-]{1,63})*\.[A-Za-z]{2,}$"
)

# Regex for validating subdomain labels (underscore allowed for _dmarc, _sip._tcp, ...)
SUBDOMAIN_REGEX = re.compile(
    r"^(?!-)[A-Za-z0-9_-]{1,63}(?<!-)(\.[A-Za-z0-9_-]{1,63})*$"
)

# Local part of an email address
EMAIL_LOCAL_REGEX = re.compile(r"^[A-Za-z0-9!#$%&'*+/=?^_`{|}~.-]{1,64}$")

# XDG config directory, respects XDG_CONFIG_HOME if set
_CONFIG_DIR = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))

# ovh.conf lookup order; later files override earlier ones
CONFIG_PATHS = [
    Path("/etc/ovh.conf"),
    _CONFIG_DIR / "ovh.conf",
    Path.home() / ".ovh.conf",
    Path.cwd() / "ovh.conf",
]

# Credentials file path: ~/.config/ovh-async/credentials.env
ENV_FILE = _CONFIG_DIR / "ovh-async" / "credentials.env"
