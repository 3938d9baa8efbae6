"""Grok pattern compiler.

Expands ``%{NAME}``, ``%{NAME:field}`` and ``%{NAME:field:type}`` tokens
into a single regular expression. Tagged tokens become named groups,
untagged tokens are substituted bare. Expansion runs as a bounded loop so
circular pattern references terminate.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from functools import lru_cache

from logstash_udm.parsers.patterns import DEFAULT_REGISTRY, PatternRegistry

logger = logging.getLogger(__name__)

DEFAULT_MAX_ITERATIONS = 10
DEFAULT_CACHE_SIZE = 256

GROK_TOKEN = re.compile(
    r"%\{(?P<pattern>[A-Z0-9_]+)(?::(?P<field>[a-zA-Z0-9_]+))?(?::(?P<type>[a-zA-Z]+))?\}"
)
# Anything that still looks like the start of a token
_PENDING_TOKEN = re.compile(r"%\{[A-Z0-9_]+")


@dataclass(frozen=True)
class CompiledPattern:
    """Result of compiling a grok pattern.

    ``regex`` is None when the expanded text is not a valid expression;
    matching then behaves exactly like a no-match.
    """

    source: str
    expanded: str
    regex: re.Pattern[str] | None
    field_names: tuple[str, ...]
    field_types: tuple[tuple[str, str], ...] = ()
    resolved: bool = True

    @property
    def ok(self) -> bool:
        return self.regex is not None

    def match(self, text: str) -> dict[str, str] | None:
        """Search ``text`` and return the named fields that participated."""
        if self.regex is None:
            return None
        m = self.regex.search(text)
        if m is None:
            return None
        return {name: value for name, value in m.groupdict().items() if value is not None}


class GrokCompiler:
    """Compile grok pattern text against a PatternRegistry."""

    def __init__(
        self,
        registry: PatternRegistry | None = None,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
        cache_size: int = DEFAULT_CACHE_SIZE,
    ):
        if max_iterations < 1:
            raise ValueError(f"max_iterations must be >= 1, got {max_iterations}")
        if cache_size < 1:
            raise ValueError(f"cache_size must be >= 1, got {cache_size}")
        self.registry = registry if registry is not None else DEFAULT_REGISTRY
        self.max_iterations = max_iterations
        # Least recently used sources are evicted once cache_size is reached
        self._compile_cached = lru_cache(maxsize=cache_size)(self._compile)

    def expand(self, source: str) -> tuple[str, list[str], dict[str, str], bool]:
        """Expand grok tokens in ``source``.

        Returns (expanded text, tagged field names in order, field types,
        whether every token was resolved).
        """
        result = source
        field_names: list[str] = []
        field_types: dict[str, str] = {}
        iterations = 0

        def substitute(m: re.Match[str]) -> str:
            fragment = self.registry.lookup(m.group("pattern"))
            name = m.group("field")
            if not name:
                return fragment
            field_names.append(name)
            if m.group("type"):
                field_types[name] = m.group("type")
            return f"(?P<{name}>{fragment})"

        while _PENDING_TOKEN.search(result) and iterations < self.max_iterations:
            expanded = GROK_TOKEN.sub(substitute, result)
            iterations += 1
            if expanded == result:
                # Leftover text looks like a token but is not a valid one
                break
            result = expanded

        resolved = _PENDING_TOKEN.search(result) is None
        if not resolved:
            logger.warning(
                "Grok expansion unresolved after %d iterations: %r", iterations, source
            )
        return result, field_names, field_types, resolved

    def compile(self, source: str) -> CompiledPattern:
        return self._compile_cached(source)

    def cache_info(self):
        return self._compile_cached.cache_info()

    def _compile(self, source: str) -> CompiledPattern:
        expanded, field_names, field_types, resolved = self.expand(source)
        try:
            # ASCII classes: \d, \w and \b never match non-Latin digits or letters
            regex: re.Pattern[str] | None = re.compile(expanded, re.ASCII)
        except re.error as e:
            logger.warning("Grok pattern %r failed to compile: %s", source, e)
            regex = None

        compiled = CompiledPattern(
            source=source,
            expanded=expanded,
            regex=regex,
            field_names=tuple(field_names),
            field_types=tuple(field_types.items()),
            resolved=resolved,
        )
        return compiled
