"""
Request signing for the OVH API.

Copyright (c) 2026 Snapp'
Author: Yannis Duvignau (yduvignau@snapp.fr)
"""

import hashlib
from typing import Union

from ovh_async.constants import SIGNATURE_PREFIX


def compute_signature(
    application_secret: str,
    consumer_key: str,
    method: str,
    url: str,
    body: str,
    timestamp: Union[int, str],
) -> str:
    """
    Compute the ``X-Ovh-Signature`` header value for a request.

    The signature is the SHA1 hex digest of the application secret,
    consumer key, method, full URL (query string included), body and
    timestamp joined with ``+``, prefixed with ``$1$``.

    Parameters:
        application_secret: Application secret
        consumer_key: Consumer key
        method: HTTP method, case insensitive
        url: Full request URL
        body: Exact request body, empty string when there is none
        timestamp: Unix timestamp, already corrected by the server delta

    Returns:
        The signature string (e.g. "$1$0a1b...")
    """
    values = [
        application_secret,
        consumer_key,
        method.upper(),
        url,
        body,
        str(timestamp),
    ]
    digest = hashlib.sha1("+".join(values).encode("utf-8")).hexdigest()
    return SIGNATURE_PREFIX + digest
