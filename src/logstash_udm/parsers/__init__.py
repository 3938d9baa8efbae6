from logstash_udm.parsers.dates import normalize_date, parse_timestamp
from logstash_udm.parsers.grok import CompiledPattern, GrokCompiler
from logstash_udm.parsers.patterns import DEFAULT_REGISTRY, PatternRegistry
from logstash_udm.parsers.pipeline import FieldMap, FilterPipeline, compile_and_match
from logstash_udm.parsers.sections import extract_section

__all__ = [
    "CompiledPattern",
    "DEFAULT_REGISTRY",
    "FieldMap",
    "FilterPipeline",
    "GrokCompiler",
    "PatternRegistry",
    "compile_and_match",
    "extract_section",
    "normalize_date",
    "parse_timestamp",
]
