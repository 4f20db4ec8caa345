from __future__ import annotations

import json
from typing import Any

from jenkins_mcp.app.config import MAX_CONSOLE_LOG_CHARS, TRUNCATION_MARKER
from jenkins_mcp.clients.jenkins_client import JenkinsClient
from jenkins_shared.errors import InvalidArgument

TRIGGERED_MESSAGE = "job triggered successfully!"


def _require_job_name(job_name: Any) -> str:
    if not isinstance(job_name, str) or not job_name.strip():
        raise InvalidArgument("job_name is required")
    return job_name.strip()


def _stringify_parameter(value: Any) -> str:
    # Jenkins expects strings; multi-select values are comma separated
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, list):
        return ",".join(_stringify_parameter(v) for v in value)
    if value is None:
        return ""
    return str(value)


def normalize_parameters(parameters: Any) -> dict[str, str]:
    """Convert a loosely typed parameters object into Jenkins query parameters."""
    if parameters is None:
        return {}
    if not isinstance(parameters, dict):
        raise InvalidArgument("parameters must be an object of key/value pairs")
    return {str(k): _stringify_parameter(v) for k, v in parameters.items()}


def parse_build_number(value: Any) -> int:
    """
    Accept an integer, an integral float or a numeric string as a build number.

    Raises:
        InvalidArgument: If the value is missing, not integral or not positive.
    """
    if value is None:
        raise InvalidArgument("missing build_number")

    if isinstance(value, bool):
        raise InvalidArgument("invalid build_number type")
    if isinstance(value, int):
        number = value
    elif isinstance(value, float):
        if not value.is_integer():
            raise InvalidArgument(f"invalid build_number: {value}")
        number = int(value)
    elif isinstance(value, str):
        # Plain ASCII digits only; int() would also take "+42", "4_2" and padding
        if not (value.isascii() and value.isdigit()):
            raise InvalidArgument("invalid build_number string")
        number = int(value)
    else:
        raise InvalidArgument("invalid build_number type")

    if number < 1:
        raise InvalidArgument(f"invalid build_number: {number}")
    return number


def truncate_log(text: str, limit: int = MAX_CONSOLE_LOG_CHARS) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + TRUNCATION_MARKER


def trigger_job(client: JenkinsClient, job_name: Any, parameters: Any = None) -> str:
    name = _require_job_name(job_name)
    client.trigger_job(name, normalize_parameters(parameters))
    return TRIGGERED_MESSAGE


def get_build_status(client: JenkinsClient, job_name: Any) -> dict[str, Any] | str:
    """Return the latest build as a JSON object, or the raw body if it is not one."""
    raw = client.last_build(_require_job_name(job_name))
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError:
        return raw
    if not isinstance(parsed, dict):
        return raw
    return parsed


def get_console_log(client: JenkinsClient, job_name: Any, build_number: Any) -> str:
    name = _require_job_name(job_name)
    number = parse_build_number(build_number)
    return truncate_log(client.console_text(name, number))
