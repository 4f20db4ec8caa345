from typing import Any

from jenkins_mcp.app.config import get_settings
from jenkins_mcp.clients.jenkins_client import JenkinsClient, build_jenkins_client
from jenkins_mcp.protocol.schemas import LIST
from jenkins_mcp.tools.jenkins import get_build_status, get_console_log, trigger_job
from jenkins_shared.errors import InvalidArgument

_client: JenkinsClient | None = None


def get_jenkins_client() -> JenkinsClient:
    """Return the process-wide Jenkins client, building it on first use."""
    global _client
    if _client is None:
        _client = build_jenkins_client(get_settings())
    return _client


def list_tools() -> list[dict[str, Any]]:
    return [
        {"name": v["name"], "description": v["description"], "input_schema": v["input_schema"]}
        for v in LIST.values()
    ]


def call_tool(
    name: str, args: dict[str, Any], client: JenkinsClient | None = None
) -> dict[str, Any] | str:
    """
    Dispatch a tool call to Jenkins.

    Returns:
        Text for plain results, or a dict for structured results.

    Raises:
        InvalidArgument: If the tool is unknown or an argument is malformed.
        UpstreamError: If Jenkins rejects the request or cannot be reached.
    """
    if name not in LIST:
        raise InvalidArgument(f"unknown tool: {name}")
    if not isinstance(args, dict):
        raise InvalidArgument("arguments must be an object")

    client = client or get_jenkins_client()

    if name == "trigger_job":
        return trigger_job(client, args.get("job_name"), args.get("parameters"))
    if name == "get_build_status":
        return get_build_status(client, args.get("job_name"))
    return get_console_log(client, args.get("job_name"), args.get("build_number"))
