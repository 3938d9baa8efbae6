"""Shape of a UDM event as produced by the mapper.

Every key is optional; sections with nothing populated are dropped.
Reference: https://cloud.google.com/chronicle/docs/reference/udm-field-list
"""

from __future__ import annotations

from typing import TypedDict


class Metadata(TypedDict, total=False):
    event_type: str
    event_timestamp: str


class User(TypedDict, total=False):
    userid: str


class Principal(TypedDict, total=False):
    hostname: str
    ip: list[str]
    port: int
    user: User


class Target(TypedDict, total=False):
    hostname: str
    ip: list[str]
    port: int
    url: str


class Http(TypedDict, total=False):
    method: str
    response_code: int
    user_agent: str
    referer: str


class Network(TypedDict, total=False):
    http: Http


class SecurityResult(TypedDict, total=False):
    action: str
    severity: str
    category: str


class Additional(TypedDict, total=False):
    parsed_fields: dict[str, str]


class UDMEvent(TypedDict, total=False):
    metadata: Metadata
    principal: Principal
    target: Target
    network: Network
    security_result: list[SecurityResult]
    additional: Additional


# Event type tags
NETWORK_HTTP = "NETWORK_HTTP"
NETWORK_DNS = "NETWORK_DNS"
NETWORK_CONNECTION = "NETWORK_CONNECTION"
USER_LOGIN = "USER_LOGIN"
GENERIC_EVENT = "GENERIC_EVENT"

# Security result values
ALLOW = "ALLOW"
BLOCK = "BLOCK"
UNKNOWN = "UNKNOWN"
INFO = "INFO"
LOW = "LOW"
MEDIUM = "MEDIUM"
HIGH = "HIGH"
HTTP_REQUEST = "HTTP_REQUEST"
