"""Built-in grok pattern table and the read-only registry wrapping it.

Fragments only use non-capturing groups, so an untagged ``%{NAME}``
reference never adds a capture group to the compiled expression.
Composite patterns (``COMMONAPACHELOG``, ``COMBINEDAPACHELOG``, ``PATH``)
refer to other entries and are expanded transitively by the compiler.
"""

from __future__ import annotations

import logging
import re
from types import MappingProxyType
from typing import Iterator, Mapping

logger = logging.getLogger(__name__)

PATTERN_NAME = re.compile(r"^[A-Z0-9_]+$")

# Catch-all used for references to unknown pattern names
FALLBACK_PATTERN = "DATA"

_BUILTIN_PATTERNS = {
    # Network
    "IPORHOST": (
        r"(?:[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}"
        r"|[a-zA-Z0-9][-a-zA-Z0-9]*(?:\.[a-zA-Z0-9][-a-zA-Z0-9]*)*)"
    ),
    "IP": r"(?:[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3})",
    "IPV6": r"(?:(?:[0-9A-Fa-f]{1,4}:){7}[0-9A-Fa-f]{1,4})",
    "IPV4": r"(?:[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3})",
    "HOSTNAME": (
        r"\b(?:[0-9A-Za-z][0-9A-Za-z-]{0,62})"
        r"(?:\.(?:[0-9A-Za-z][0-9A-Za-z-]{0,62}))*(?:\.?|\b)"
    ),

    # HTTP
    "HTTPDATE": r"[0-9]{2}/[A-Z][a-z]{2}/[0-9]{4}:[0-9]{2}:[0-9]{2}:[0-9]{2} [+-][0-9]{4}",

    # Basic
    "NUMBER": r"(?:[+-]?(?:[0-9]+(?:\.[0-9]+)?|\.[0-9]+))",
    "INT": r"(?:[+-]?[0-9]+)",
    "WORD": r"\b\w+\b",
    "DATA": r".*?",
    "GREEDYDATA": r".*",
    "SPACE": r"\s*",
    "NOTSPACE": r"\S+",
    "QS": r'"(?:[^"\\]|\\.)*"',
    "QUOTEDSTRING": r'"(?:[^"\\]|\\.)*"',

    # User and identity
    "USER": r"[a-zA-Z0-9._-]+",
    "USERNAME": r"[a-zA-Z0-9._-]+",

    # Date/time
    "MONTHNUM": r"(?:0?[1-9]|1[0-2])",
    "MONTHDAY": r"(?:(?:0[1-9])|(?:[12][0-9])|(?:3[01])|[1-9])",
    "YEAR": r"(?:\d\d){1,2}",
    "HOUR": r"(?:2[0123]|[01]?[0-9])",
    "MINUTE": r"(?:[0-5][0-9])",
    "SECOND": r"(?:(?:[0-5]?[0-9]|60)(?:[:.,][0-9]+)?)",

    # Paths
    "PATH": r"(?:%{UNIXPATH}|%{WINPATH})",
    "UNIXPATH": r"(?:/[\w_%!$@:.,-]*/?)(?:[\w_%!$@:.,-]+)?",
    "WINPATH": r"(?:[A-Za-z]+:|\\)(?:\\[^\\?*]*)+",

    # Access logs
    "COMMONAPACHELOG": (
        r"%{IPORHOST:client_ip} %{USER:ident} %{USER:auth} "
        r"\[%{HTTPDATE:timestamp}\] "
        r'"(?:%{WORD:http_method} %{NOTSPACE:request}'
        r'(?: HTTP/%{NUMBER:http_version})?|%{DATA})" '
        r"%{NUMBER:response_code} (?:%{NUMBER:bytes}|-)"
    ),
    "COMBINEDAPACHELOG": r"%{COMMONAPACHELOG} %{QS:referrer} %{QS:user_agent}",
}

DEFAULT_PATTERNS: Mapping[str, str] = MappingProxyType(_BUILTIN_PATTERNS)


class PatternRegistry:
    """Immutable mapping from grok pattern name to regex fragment.

    The built-in table is copied on construction; ``extra`` entries are
    layered on top of it and may override built-ins. Nothing mutates a
    registry after it is built, so one instance can be shared freely.
    """

    def __init__(self, extra: Mapping[str, str] | None = None):
        table = dict(DEFAULT_PATTERNS)
        for name, fragment in (extra or {}).items():
            if not isinstance(name, str) or not PATTERN_NAME.match(name):
                raise ValueError(
                    f"Invalid pattern name {name!r}: must match {PATTERN_NAME.pattern}"
                )
            if not isinstance(fragment, str):
                raise ValueError(f"Pattern {name!r}: fragment must be a string")
            table[name] = fragment
        self._patterns: Mapping[str, str] = MappingProxyType(table)

    def lookup(self, name: str) -> str:
        """Return the fragment for ``name``, or the catch-all if unknown."""
        fragment = self._patterns.get(name)
        if fragment is None:
            logger.debug("Unknown grok pattern %r, using %s", name, FALLBACK_PATTERN)
            return self._patterns[FALLBACK_PATTERN]
        return fragment

    def extend(self, extra: Mapping[str, str]) -> PatternRegistry:
        """Return a new registry with ``extra`` layered over this one."""
        merged = dict(self._patterns)
        merged.update(extra)
        return PatternRegistry(merged)

    def names(self) -> list[str]:
        return sorted(self._patterns.keys())

    def as_dict(self) -> dict[str, str]:
        return dict(self._patterns)

    def __contains__(self, name: object) -> bool:
        return name in self._patterns

    def __len__(self) -> int:
        return len(self._patterns)

    def __iter__(self) -> Iterator[str]:
        return iter(self._patterns)


DEFAULT_REGISTRY = PatternRegistry()
