"""Logstash-style filter pipeline: grok, then date, then mutate.

Only the subset needed to turn one raw line into a flat field map is
understood: the first ``match => { "message" => "..." }`` of the first
``grok {}`` block, a ``date { match => ["field", "format"] }`` clause and
a ``remove_field => [...]`` list.
"""

from __future__ import annotations

import logging
import re

from logstash_udm.parsers.dates import normalize_date
from logstash_udm.parsers.grok import GrokCompiler
from logstash_udm.parsers.sections import extract_section

logger = logging.getLogger(__name__)

FieldMap = dict[str, str]

_GROK_MATCH = re.compile(r'match\s*=>\s*\{[^}]*"message"\s*=>\s*"((?:[^"\\]|\\.)+)"')
_DATE_MATCH = re.compile(r'date\s*\{[^}]*match\s*=>\s*\["([^"]+)",\s*"([^"]+)"\]')
_REMOVE_FIELD = re.compile(r"remove_field\s*=>\s*\[([^\]]+)\]")
_QUOTED = re.compile(r'"([^"]+)"')

# Stands in for an escaped backslash while quotes are unescaped
_BACKSLASH_PLACEHOLDER = "\x00"


def unescape_pattern(text: str) -> str:
    """Undo config-string escaping: '\\\\' -> '\\' and '\\"' -> '"'."""
    text = text.replace("\\\\", _BACKSLASH_PLACEHOLDER)
    text = text.replace('\\"', '"')
    return text.replace(_BACKSLASH_PLACEHOLDER, "\\")


def extract_grok_pattern(grok_body: str) -> str | None:
    """Return the unescaped "message" pattern from a grok block body."""
    m = _GROK_MATCH.search(grok_body)
    if m is None:
        return None
    return unescape_pattern(m.group(1))


class FilterPipeline:
    """Run a filter configuration against a single raw log line."""

    def __init__(self, compiler: GrokCompiler | None = None):
        self.compiler = compiler if compiler is not None else GrokCompiler()

    def run(self, raw_log: str, filter_config: str) -> FieldMap | None:
        """Parse ``raw_log`` with ``filter_config``. Returns None on failure."""
        line = raw_log.strip()
        config = filter_config.strip()

        filter_section = extract_section(config, "filter")
        if filter_section is None:
            logger.debug("No balanced filter {} section in configuration")
            return None

        grok_section = extract_section(filter_section, "grok")
        if grok_section is None:
            logger.debug("No balanced grok {} section in filter")
            return None

        fields = self.match_grok(line, grok_section)
        if fields is None:
            return None

        self.apply_date(fields, filter_section)
        self.apply_mutate(fields, filter_section)
        return fields

    def match_grok(self, line: str, grok_section: str) -> FieldMap | None:
        pattern = extract_grok_pattern(grok_section)
        if pattern is None:
            logger.debug('No match => { "message" => ... } in grok section')
            return None

        compiled = self.compiler.compile(pattern)
        if not compiled.field_names:
            logger.debug("Grok pattern %r declares no fields", pattern)
            return None

        fields = compiled.match(line)
        if fields is None:
            logger.debug("Grok pattern %r did not match %r", pattern, line)
        return fields

    def apply_date(self, fields: FieldMap, filter_section: str) -> None:
        m = _DATE_MATCH.search(filter_section)
        if m is None:
            return
        source_field, fmt = m.group(1), m.group(2)
        value = fields.get(source_field)
        if not value:
            return
        try:
            fields["@timestamp"] = normalize_date(value, fmt)
        except (TypeError, ValueError) as e:
            logger.warning("Date filter failed on %s=%r: %s", source_field, value, e)

    def apply_mutate(self, fields: FieldMap, filter_section: str) -> None:
        m = _REMOVE_FIELD.search(filter_section)
        if m is None:
            return
        for name in _QUOTED.findall(m.group(1)):
            fields.pop(name, None)


_default_pipeline = FilterPipeline()


def compile_and_match(raw_log: str, filter_config: str) -> FieldMap | None:
    """Parse one raw line with the default pattern registry."""
    return _default_pipeline.run(raw_log, filter_config)
