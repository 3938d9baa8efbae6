"""logstash-udm: grok-based log parsing and UDM event mapping."""

from logstash_udm.config import Settings, load_settings, validate_settings
from logstash_udm.parsers.grok import CompiledPattern, GrokCompiler
from logstash_udm.parsers.patterns import DEFAULT_REGISTRY, PatternRegistry
from logstash_udm.parsers.pipeline import FilterPipeline, compile_and_match
from logstash_udm.service import TransformResult, transform
from logstash_udm.udm.mapper import UDMFieldMapper, map_to_event
from logstash_udm.udm.sanitize import prune

__all__ = [
    "CompiledPattern",
    "DEFAULT_REGISTRY",
    "FilterPipeline",
    "GrokCompiler",
    "PatternRegistry",
    "Settings",
    "TransformResult",
    "UDMFieldMapper",
    "compile_and_match",
    "load_settings",
    "map_to_event",
    "prune",
    "transform",
    "validate_settings",
]
