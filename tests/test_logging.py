"""Tests for the log sanitizing helpers"""
import logging

import httpx
import pytest

from storefront.api.http import send_json
from storefront.logging import (
    mask_email_for_logging,
    sanitize_id_for_logging,
    sanitize_string_for_logging,
)


class TestSanitizers:
    def test_string_newlines_escaped(self):
        """Injected line breaks cannot forge a second log line"""
        assert sanitize_string_for_logging("bad\nINFO forged") == "bad\\nINFO forged"

    def test_string_truncated(self):
        """Long values are cut to max_length with an ellipsis"""
        assert sanitize_string_for_logging("x" * 60, max_length=10) == "x" * 10 + "..."

    def test_string_empty(self):
        """Missing values log as N/A"""
        assert sanitize_string_for_logging(None) == "N/A"
        assert sanitize_string_for_logging("") == "N/A"

    def test_id_truncated_to_eight(self):
        """IDs keep only their first eight characters"""
        assert sanitize_id_for_logging("user-001-extra") == "user-001"

    def test_email_masked(self):
        """Only the first character of the local part is kept"""
        assert mask_email_for_logging("user@nexarest.com") == "u***@nexarest.com"


@pytest.mark.asyncio
async def test_failed_request_log_is_single_line(make_client, caplog):
    """Transport error text is escaped before it reaches the log"""
    def handler(request):
        raise httpx.ConnectError("refused\nCRITICAL forged entry", request=request)

    with caplog.at_level(logging.WARNING, logger="storefront.api.http"):
        response = await send_json(make_client(handler), "GET", "http://api.test/users/profile")

    assert response.error
    assert any("refused\\nCRITICAL forged entry" in record.getMessage() for record in caplog.records)
    assert all("\n" not in record.getMessage() for record in caplog.records)
