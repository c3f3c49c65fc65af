"""
Tests for the signing module.

Copyright (c) 2026 Snapp'
Author: Yannis Duvignau (yduvignau@snapp.fr)
"""

from ovh_async.signing import compute_signature


class TestComputeSignature:
    """Tests for request signature computation."""

    def test_get_without_body(self):
        signature = compute_signature(
            "app_secret", "consumer_key", "GET",
            "https://eu.api.ovh.com/1.0/me", "", 1700000000,
        )
        assert signature == "$1$24eab77e1a0dcb58323563d7adfd6964d3465edd"

    def test_post_with_body(self):
        signature = compute_signature(
            "app_secret", "consumer_key", "POST",
            "https://eu.api.ovh.com/1.0/domain/zone/example.com/record",
            '{"fieldType": "A", "target": "1.2.3.4"}',
            "1700000000",
        )
        assert signature == "$1$0d1bb8ac3ed7b5e602141bd4ae3fedd57c7e9348"

    def test_method_is_case_insensitive(self):
        args = ("app_secret", "consumer_key")
        rest = ("https://eu.api.ovh.com/1.0/me", "", 1700000000)
        assert compute_signature(*args, "get", *rest) == compute_signature(*args, "GET", *rest)

    def test_timestamp_changes_signature(self):
        base = ("app_secret", "consumer_key", "GET", "https://eu.api.ovh.com/1.0/me", "")
        assert compute_signature(*base, 1700000000) != compute_signature(*base, 1700000001)
