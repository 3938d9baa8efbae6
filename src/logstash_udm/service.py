"""Parse-and-map entry point producing the JSON result envelope.

This is the contract an HTTP handler wraps: it never raises for bad
input, it reports a status code and a Markdown explanation instead.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from logstash_udm.parsers.pipeline import FieldMap, FilterPipeline
from logstash_udm.udm.explain import PARSE_FAILURE_EXPLANATION, generate_explanation
from logstash_udm.udm.mapper import UDMFieldMapper
from logstash_udm.udm.schema import UDMEvent

logger = logging.getLogger(__name__)

MISSING_INPUT_MESSAGE = "Missing required fields: rawLogEvent or parserCode"
PARSE_FAILED_MESSAGE = "Failed to parse log"


@dataclass
class TransformResult:
    """Outcome of one transform call."""

    status: int
    success: bool = False
    parsed: FieldMap | None = None
    udm: UDMEvent | None = None
    explanation: str | None = None
    message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        if self.success:
            return {
                "success": True,
                "parsed": self.parsed,
                "udm": self.udm,
                "explanation": self.explanation,
            }
        body: dict[str, Any] = {"message": self.message}
        if self.explanation is not None:
            body["explanation"] = self.explanation
        return body


def transform(
    raw_log: str | None,
    filter_config: str | None,
    pipeline: FilterPipeline | None = None,
    mapper: UDMFieldMapper | None = None,
    explain: bool = True,
) -> TransformResult:
    """Parse ``raw_log`` with ``filter_config`` and map the result to UDM."""
    if not raw_log or not filter_config:
        return TransformResult(status=400, message=MISSING_INPUT_MESSAGE)

    pipeline = pipeline if pipeline is not None else FilterPipeline()
    mapper = mapper if mapper is not None else UDMFieldMapper()

    parsed = pipeline.run(raw_log, filter_config)
    if parsed is None:
        logger.info("Log did not parse with the supplied configuration")
        return TransformResult(
            status=400,
            message=PARSE_FAILED_MESSAGE,
            explanation=PARSE_FAILURE_EXPLANATION,
        )

    udm = mapper.map(parsed)
    logger.debug("Mapped %d parsed fields to UDM", len(parsed))
    return TransformResult(
        status=200,
        success=True,
        parsed=parsed,
        udm=udm,
        explanation=generate_explanation(parsed, udm) if explain else None,
    )
