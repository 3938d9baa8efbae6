"""Map a flat grok field map onto the UDM event schema.

Each UDM leaf is fed by an ordered alias chain; the first alias holding a
non-empty value wins and the others are ignored.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Mapping

from logstash_udm.parsers.dates import parse_timestamp
from logstash_udm.udm.rules import RESPONSE_CODE_FIELDS, infer_event_type, security_result_for
from logstash_udm.udm.sanitize import prune
from logstash_udm.udm.schema import GENERIC_EVENT, UDMEvent

logger = logging.getLogger(__name__)

_INTEGER = re.compile(r"^[+-]?[0-9]+$")
# Longer digit runs are left unset
_MAX_INT_DIGITS = 20

PRINCIPAL_IP = ("client_ip", "src_ip", "source_ip")
PRINCIPAL_HOSTNAME = ("client_hostname", "src_hostname")
PRINCIPAL_PORT = ("client_port", "src_port")
PRINCIPAL_USER = ("user", "username", "ident")

TARGET_IP = ("dst_ip", "dest_ip", "target_ip")
TARGET_HOSTNAME = ("dst_hostname", "dest_hostname", "target_hostname")
TARGET_PORT = ("dst_port", "dest_port", "target_port")
TARGET_URL = ("url", "request_url")

HTTP_METHOD = ("http_method", "method")
HTTP_USER_AGENT = ("user_agent", "useragent")
HTTP_REFERER = ("referrer", "referer")


def first_present(fields: Mapping[str, str], names: tuple[str, ...]) -> str | None:
    """Return the first non-empty value among ``names``."""
    for name in names:
        value = fields.get(name)
        if value:
            return value
    return None


def to_int(value: str | None) -> int | None:
    """Base-10 integer coercion; None (never 0) for missing or invalid input."""
    if value is None:
        return None
    text = str(value).strip()
    if not _INTEGER.match(text):
        logger.debug("Non-numeric value %r left unset", value)
        return None
    if len(text.lstrip("+-")) > _MAX_INT_DIGITS:
        logger.debug("Integer value of %d characters left unset", len(text))
        return None
    try:
        return int(text, 10)
    except ValueError as e:
        logger.debug("Integer conversion failed for %d characters: %s", len(text), e)
        return None


def strip_quotes(value: str | None) -> str | None:
    """Remove one leading and one trailing double quote, if present."""
    if value is None:
        return None
    if value.startswith('"'):
        value = value[1:]
    if value.endswith('"'):
        value = value[:-1]
    return value


def _wrap(value: str | None) -> list[str] | None:
    return [value] if value is not None else None


class UDMFieldMapper:
    """Build a UDM event dict from a flat field map. Never raises."""

    def map(self, fields: Mapping[str, str]) -> UDMEvent:
        response_code = to_int(first_present(fields, RESPONSE_CODE_FIELDS))
        user = first_present(fields, PRINCIPAL_USER)

        event: dict[str, Any] = {
            "metadata": {
                "event_type": self._event_type(fields),
                "event_timestamp": self._timestamp(fields),
            },
            "principal": {
                "hostname": first_present(fields, PRINCIPAL_HOSTNAME),
                "ip": _wrap(first_present(fields, PRINCIPAL_IP)),
                "port": to_int(first_present(fields, PRINCIPAL_PORT)),
                "user": {"userid": user},
            },
            "target": {
                "hostname": first_present(fields, TARGET_HOSTNAME),
                "ip": _wrap(first_present(fields, TARGET_IP)),
                "port": to_int(first_present(fields, TARGET_PORT)),
                "url": first_present(fields, TARGET_URL),
            },
            "network": {
                "http": {
                    "method": first_present(fields, HTTP_METHOD),
                    "response_code": response_code,
                    "user_agent": strip_quotes(first_present(fields, HTTP_USER_AGENT)),
                    "referer": strip_quotes(first_present(fields, HTTP_REFERER)),
                },
            },
            "security_result": security_result_for(fields, response_code),
        }

        cleaned: dict[str, Any] = prune(event) or {}
        # Raw fields are kept verbatim, outside of pruning
        cleaned["additional"] = {"parsed_fields": dict(fields)}
        return cleaned  # type: ignore[return-value]

    def _event_type(self, fields: Mapping[str, str]) -> str | None:
        event_type = infer_event_type(fields)
        if event_type == GENERIC_EVENT:
            return None
        return event_type

    def _timestamp(self, fields: Mapping[str, str]) -> str | None:
        if fields.get("@timestamp"):
            return fields["@timestamp"]
        if fields.get("timestamp"):
            return parse_timestamp(fields["timestamp"])
        return None


_default_mapper = UDMFieldMapper()


def map_to_event(fields: Mapping[str, str]) -> UDMEvent:
    """Map, classify, infer and prune in one call."""
    return _default_mapper.map(fields)
