"""
Parse tool directives out of model replies.

A directive is a reply of the form::

    TOOL: trigger_job {"job_name": "demo-job"}

The arguments are a single JSON object decoded with the standard JSON decoder, so
nested objects and escaped quotes inside strings are handled. Bare literals that
models often spell the Python way (True, False, None) are normalized first.
"""

import json
from typing import Any, cast

from jenkins_agent.app.config import DIRECTIVE_PREFIX
from jenkins_agent.infrastructure.data_models import ToolRequest
from jenkins_shared.errors import DirectiveParseError
from jenkins_shared.platform_manager import create_logger

logger = create_logger(logger_name="jenkins-agent")

_LITERALS = {"true": "true", "false": "false", "null": "null", "none": "null"}


def _is_word_char(ch: str) -> bool:
    return ch.isalnum() or ch == "_"


def normalize_literals(raw: str) -> str:
    """
    Rewrite bare true/false/null/none in any capitalization to JSON literals.

    Characters inside double-quoted strings are copied unchanged.
    """
    out: list[str] = []
    i = 0
    in_string = False
    while i < len(raw):
        ch = raw[i]
        if in_string:
            out.append(ch)
            if ch == "\\" and i + 1 < len(raw):
                out.append(raw[i + 1])
                i += 2
                continue
            if ch == '"':
                in_string = False
            i += 1
            continue

        if ch == '"':
            in_string = True
            out.append(ch)
            i += 1
            continue

        if _is_word_char(ch):
            start = i
            while i < len(raw) and _is_word_char(raw[i]):
                i += 1
            word = raw[start:i]
            out.append(_LITERALS.get(word.lower(), word))
            continue

        out.append(ch)
        i += 1
    return "".join(out)


def _valid_tool_name(name: str) -> bool:
    return bool(name) and all(_is_word_char(ch) or ch == "-" for ch in name)


def parse_directive(reply: str) -> ToolRequest:
    """
    Parse a directive reply into a ToolRequest.

    Raises:
        DirectiveParseError: If the reply is not a well-formed directive.
    """
    text = reply.strip()
    if not text.startswith(DIRECTIVE_PREFIX):
        raise DirectiveParseError("reply does not start with the directive prefix")

    rest = text[len(DIRECTIVE_PREFIX) :].strip()
    brace = rest.find("{")
    if brace == -1:
        raise DirectiveParseError(f"no JSON object found in directive: {rest}")

    name = rest[:brace].strip()
    if not _valid_tool_name(name):
        raise DirectiveParseError(f"invalid tool name in directive: {name!r}")

    raw_args = normalize_literals(rest[brace:])
    try:
        parsed, end = json.JSONDecoder().raw_decode(raw_args)
    except json.JSONDecodeError as e:
        raise DirectiveParseError(f"failed to parse tool params JSON: {e}") from e

    if raw_args[end:].strip():
        raise DirectiveParseError(f"unexpected text after tool params: {raw_args[end:]!r}")
    if not isinstance(parsed, dict):
        raise DirectiveParseError("tool params are not a JSON object")

    return ToolRequest(name=name, arguments=cast(dict[str, Any], parsed))


def detect_directive(reply: str) -> ToolRequest | None:
    """Return the directive in a reply, or None when the reply should be treated as text."""
    if not reply.strip().startswith(DIRECTIVE_PREFIX):
        return None

    try:
        return parse_directive(reply)
    except DirectiveParseError as e:
        logger.debug(f"Ignoring malformed directive: {e}")
        return None
