from jenkins_mcp.app.config import SERVER_NAME, SERVER_VERSION


def manifest(base_url: str) -> dict[str, str | dict[str, str]]:
    return {
        "name": SERVER_NAME,
        "version": SERVER_VERSION,
        "description": "MCP server exposing Jenkins job control tools",
        "sse_endpoint": f"{base_url}/sse",
        "tools_endpoint": f"{base_url}/mcp/tools",
        "schema_endpoint": f"{base_url}/mcp/schemas",
        "auth": {"type": "none"},
    }
