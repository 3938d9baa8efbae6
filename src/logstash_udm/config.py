"""Settings dataclass and YAML loading/validation.

Example file::

    grok:
      max_iterations: 10
      patterns:
        SYSLOGPROG: '[\\w._/-]+'
        SSHD_FAIL: 'Failed password for %{USER:user} from %{IP:src_ip}'
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from logstash_udm.parsers.grok import DEFAULT_MAX_ITERATIONS, GrokCompiler
from logstash_udm.parsers.patterns import PatternRegistry
from logstash_udm.parsers.pipeline import FilterPipeline


@dataclass
class Settings:
    """Grok compiler settings and user-supplied patterns."""

    max_iterations: int = DEFAULT_MAX_ITERATIONS
    patterns: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.max_iterations, int) or self.max_iterations < 1:
            raise ValueError(f"max_iterations must be an integer >= 1, got {self.max_iterations!r}")
        # Raises ValueError for bad names or fragments
        PatternRegistry(self.patterns)

    def build_registry(self) -> PatternRegistry:
        return PatternRegistry(self.patterns)

    def build_compiler(self) -> GrokCompiler:
        return GrokCompiler(self.build_registry(), max_iterations=self.max_iterations)

    def build_pipeline(self) -> FilterPipeline:
        return FilterPipeline(self.build_compiler())


def _parse_grok(raw: dict[str, Any]) -> Settings:
    patterns = raw.get("patterns") or {}
    if not isinstance(patterns, dict):
        raise ValueError("grok.patterns must be a mapping of NAME: fragment")
    return Settings(
        max_iterations=raw.get("max_iterations", DEFAULT_MAX_ITERATIONS),
        patterns=dict(patterns),
    )


def load_settings(path: Path) -> Settings:
    """Load and validate a settings YAML file."""
    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError(f"Settings file {path} must contain a mapping")

    grok = raw.get("grok") or {}
    if not isinstance(grok, dict):
        raise ValueError("grok section must be a mapping")
    return _parse_grok(grok)


def validate_settings(path: Path) -> list[str]:
    """Validate a settings YAML file, returning a list of errors (empty = valid)."""
    errors: list[str] = []
    try:
        load_settings(path)
    except (ValueError, TypeError) as e:
        errors.append(str(e))
    except yaml.YAMLError as e:
        errors.append(f"YAML parse error: {e}")
    except OSError as e:
        errors.append(f"Cannot read {path}: {e}")
    return errors
