"""Markdown explanations returned alongside parse results."""

from __future__ import annotations

import json
from typing import Any, Mapping

PARSE_FAILURE_EXPLANATION = """## Parsing Failed

The log could not be parsed with the provided Logstash configuration.

### Possible Issues:

1. **Grok pattern mismatch**: The grok pattern may not match the log format
2. **Invalid configuration**: Check your Logstash filter configuration syntax
3. **Missing fields**: Ensure the log contains the expected fields

### Tips:

- Test your grok patterns incrementally
- Use simpler patterns first, then add complexity
- Check for escaping issues in the pattern
- Verify that field names don't contain special characters"""

_SUGGESTIONS = [
    "**Enrich with context**: Consider adding more contextual fields like geographic location or threat intelligence",
    "**Normalize timestamps**: Ensure all timestamps are in ISO 8601 format",
    "**Add security context**: Include threat indicators or anomaly scores if available",
    "**Validate data types**: Ensure numeric fields (ports, response codes) are properly typed",
]


def _json_block(data: Any) -> str:
    return "```json\n" + json.dumps(data, indent=2) + "\n```\n\n"


def generate_explanation(fields: Mapping[str, str], event: Mapping[str, Any]) -> str:
    """Describe how ``fields`` ended up as ``event``."""
    parts = ["## UDM Mapping Explanation\n\n"]

    parts.append("### Parsed Fields\n\n")
    parts.append("The following fields were extracted from the raw log:\n\n")
    parts.append(_json_block(dict(fields)))

    parts.append("### UDM Event Structure\n\n")
    parts.append("The parsed fields were mapped to the UDM model as follows:\n\n")
    parts.append(_json_block(event))

    parts.append("### Field Mappings\n\n")
    principal_ip = event.get("principal", {}).get("ip")
    if principal_ip:
        parts.append(
            f"- **Principal IP**: {principal_ip[0]} - Represents the source/client making the request\n"
        )
    http = event.get("network", {}).get("http", {})
    if http.get("method"):
        parts.append(f"- **HTTP Method**: {http['method']} - The HTTP verb used in the request\n")
    if http.get("response_code") is not None:
        parts.append(
            f"- **Response Code**: {http['response_code']} - The HTTP status code returned\n"
        )
    event_type = event.get("metadata", {}).get("event_type")
    if event_type:
        parts.append(
            f"- **Event Type**: {event_type} - Inferred type based on the parsed fields\n"
        )

    parts.append("\n### Suggestions\n\n")
    for i, suggestion in enumerate(_SUGGESTIONS, 1):
        parts.append(f"{i}. {suggestion}\n")

    return "".join(parts)
