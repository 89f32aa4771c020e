"""Utility helpers shared across the test-suite."""

from __future__ import annotations

import re
from typing import Any

_CSRF_RE = re.compile(r'name=["\']csrf_token["\'][^>]*value=["\']([^"\']+)["\']', re.IGNORECASE)


def extract_csrf_token(response: Any, *, required: bool = True) -> str:
    """Return the first CSRF token found in ``response`` HTML content."""

    if hasattr(response, "data"):
        html: str = response.data.decode("utf-8")
    elif isinstance(response, (bytes, bytearray)):
        html = response.decode("utf-8")
    else:
        html = str(response)
    match = _CSRF_RE.search(html)
    if not match:
        if required:
            raise AssertionError("CSRF token not found in response")
        return ""
    return match.group(1)


class RecordingGateway:
    """Gateway double that records the statements it is asked to issue."""

    def __init__(self, fail_with: Exception | None = None) -> None:
        self.calls: list[tuple] = []
        self.fail_with = fail_with

    def _record(self, *call):
        self.calls.append(call)
        if self.fail_with is not None:
            raise self.fail_with

    def insert(self, customer_id, amount_cents, status, issued_on):
        self._record("insert", customer_id, amount_cents, status, issued_on)
        return "generated-id"

    def update(self, invoice_id, customer_id, amount_cents, status):
        self._record("update", invoice_id, customer_id, amount_cents, status)

    def delete(self, invoice_id):
        self._record("delete", invoice_id)
