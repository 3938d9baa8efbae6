"""Shared fixtures for logstash-udm tests."""

from __future__ import annotations

import pytest

from logstash_udm.parsers.grok import GrokCompiler
from logstash_udm.parsers.pipeline import FilterPipeline
from logstash_udm.udm.mapper import UDMFieldMapper


# ── Sample log lines ──────────────────────────────────────────────────

COMBINED_LOG_LINE = (
    '127.0.0.1 - frank [24/Apr/2017:21:22:23 -0700] '
    '"GET /index.html HTTP/1.1" 200 1234 "http://google.com" "Mozilla/5.0"'
)

SAMPLE_ACCESS_LINES = [
    COMBINED_LOG_LINE,
    '10.0.0.5 - admin [17/Feb/2026:10:16:00 +0000] "POST /api/login HTTP/1.1" 302 0 "-" "curl/7.68.0"',
    '192.168.1.50 - - [17/Feb/2026:10:17:00 +0000] "GET /admin HTTP/1.1" 403 196 "-" "Mozilla/5.0"',
]


# ── Sample configurations ─────────────────────────────────────────────

COMBINED_CONFIG = """
filter {
  grok {
    match => { "message" => "%{COMBINEDAPACHELOG}" }
  }
  date {
    match => ["timestamp", "dd/MMM/yyyy:HH:mm:ss Z"]
  }
}
"""

FIREWALL_CONFIG = """
input { stdin {} }
filter {
  grok {
    match => { "message" => "%{IP:src_ip}:%{INT:src_port} -> %{IP:dst_ip}:%{INT:dst_port} %{WORD:action}" }
  }
  mutate {
    remove_field => ["action"]
  }
}
output { stdout {} }
"""


def grok_config(pattern: str) -> str:
    """Wrap a grok pattern in a minimal filter configuration."""
    return f'filter {{ grok {{ match => {{ "message" => "{pattern}" }} }} }}'


@pytest.fixture
def compiler():
    return GrokCompiler()


@pytest.fixture
def pipeline():
    return FilterPipeline()


@pytest.fixture
def mapper():
    return UDMFieldMapper()
