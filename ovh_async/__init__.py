"""
ovh-async - An asynchronous client for the OVH REST API.

This package provides typed bindings for DNS zone records and email
redirections, and a signed low-level call path for every other route.

Copyright (c) 2026 Snapp'
Author: Yannis Duvignau (yduvignau@snapp.fr)
"""

from ovh_async.client import OvhClient
from ovh_async.config import OvhCredentials
from ovh_async.exceptions import APIError, NetworkError, OvhError

__version__ = "0.1.0"

__all__ = ["OvhClient", "OvhCredentials", "OvhError", "APIError", "NetworkError"]
