"""Balanced-brace section extraction for Logstash-style configuration text.

This is a purpose-built scanner, not a config grammar: braces inside
quoted strings are counted like any other brace.
"""

from __future__ import annotations

import re


def extract_section(text: str, keyword: str) -> str | None:
    """Return the body of the first ``keyword { ... }`` block in ``text``.

    The body is the text strictly between the opening brace and the brace
    that brings the nesting depth back to zero. Returns None if the keyword
    is not found or the braces never balance.
    """
    start = re.search(re.escape(keyword) + r"\s*\{", text)
    if start is None:
        return None

    depth = 1
    pos = start.end()
    while pos < len(text):
        char = text[pos]
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return text[start.end():pos]
        pos += 1
    return None
