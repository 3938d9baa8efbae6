"""Rule tables for security classification and event type inference."""

from __future__ import annotations

from typing import Mapping

from logstash_udm.udm.schema import (
    ALLOW,
    BLOCK,
    GENERIC_EVENT,
    HIGH,
    HTTP_REQUEST,
    INFO,
    LOW,
    MEDIUM,
    NETWORK_CONNECTION,
    NETWORK_DNS,
    NETWORK_HTTP,
    UNKNOWN,
    USER_LOGIN,
    SecurityResult,
)

RESPONSE_CODE_FIELDS = ("response_code", "status_code", "http_status")

AUTH_FAILURE_CODES = {401, 403}

# Ordered: the first rule whose fields are all satisfied wins.
EVENT_TYPE_RULES: list[tuple[str, list[tuple[str, ...]]]] = [
    (NETWORK_HTTP, [("http_method", "method", "response_code")]),
    (NETWORK_DNS, [("dns_query", "dns_response")]),
    (NETWORK_CONNECTION, [("src_ip",), ("dst_ip",)]),
    (USER_LOGIN, [("user", "username")]),
]


def _present(fields: Mapping[str, str], names: tuple[str, ...]) -> bool:
    return any(fields.get(name) for name in names)


def classify_status(code: int | None) -> tuple[str, str]:
    """Map an HTTP status code to (action, severity)."""
    if code is None:
        return UNKNOWN, UNKNOWN
    if 200 <= code < 300:
        return ALLOW, INFO
    if 300 <= code < 400:
        return ALLOW, INFO
    if 400 <= code < 500:
        if code in AUTH_FAILURE_CODES:
            return BLOCK, MEDIUM
        return BLOCK, LOW
    if code >= 500:
        return UNKNOWN, HIGH
    return UNKNOWN, UNKNOWN


def security_result_for(
    fields: Mapping[str, str], code: int | None
) -> list[SecurityResult] | None:
    """Build the security_result list when a response code field exists.

    ``code`` is the already-coerced status; None when it was not numeric.
    """
    if not _present(fields, RESPONSE_CODE_FIELDS):
        return None
    action, severity = classify_status(code)
    return [{"action": action, "severity": severity, "category": HTTP_REQUEST}]


def infer_event_type(fields: Mapping[str, str]) -> str:
    for event_type, requirements in EVENT_TYPE_RULES:
        if all(_present(fields, names) for names in requirements):
            return event_type
    return GENERIC_EVENT
