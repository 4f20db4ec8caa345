import json
from typing import Any

import mcp.types as types
from anyio import to_thread
from fastapi import FastAPI
from mcp.server.lowlevel import Server
from mcp.server.sse import SseServerTransport
from starlette.requests import Request
from starlette.responses import Response

from jenkins_mcp.app.config import SERVER_NAME, SERVER_VERSION
from jenkins_mcp.protocol.router import call_tool, list_tools
from jenkins_shared.errors import InvalidArgument, UpstreamError
from jenkins_shared.platform_manager import create_logger

logger = create_logger(logger_name="jenkins-mcp")

SSE_PATH = "/sse"
MESSAGES_PATH = "/messages/"


def to_call_result(result: dict[str, Any] | str) -> dict[str, Any]:
    """Shape a tool result like an MCP CallToolResult for the plain HTTP surface."""
    if isinstance(result, dict):
        return {
            "content": [{"type": "text", "text": json.dumps(result, indent=2)}],
            "structuredContent": result,
            "isError": False,
        }
    return {"content": [{"type": "text", "text": result}], "isError": False}


def to_error_result(message: str) -> dict[str, Any]:
    return {"content": [{"type": "text", "text": message}], "isError": True}


def build_mcp_server() -> Server:
    """
    Build the MCP server that exposes the Jenkins tools.

    Tool failures are raised from the call handler; the MCP server turns them
    into `isError` results carrying the exception message.
    """
    server: Server = Server(SERVER_NAME, version=SERVER_VERSION)

    @server.list_tools()
    async def handle_list_tools() -> list[types.Tool]:
        return [
            types.Tool(
                name=tool["name"],
                description=tool["description"],
                inputSchema=tool["input_schema"],
            )
            for tool in list_tools()
        ]

    @server.call_tool()
    async def handle_call_tool(
        name: str, arguments: dict[str, Any]
    ) -> dict[str, Any] | list[types.TextContent]:
        logger.info(f"Tools call received: {name} {arguments}")

        # The Jenkins client is blocking, keep it off the event loop
        try:
            result = await to_thread.run_sync(call_tool, name, arguments or {})
        except (InvalidArgument, UpstreamError) as e:
            logger.error(f"Tool {name} failed: {e}")
            raise

        if isinstance(result, dict):
            return result
        return [types.TextContent(type="text", text=result)]

    return server


def mount_sse_transport(app: FastAPI, server: Server) -> None:
    """Serve the MCP server over SSE: a GET stream plus a POST endpoint for messages."""
    sse = SseServerTransport(MESSAGES_PATH)

    async def handle_sse(request: Request) -> Response:
        logger.info("SSE client connected")
        async with sse.connect_sse(request.scope, request.receive, request._send) as (
            read_stream,
            write_stream,
        ):
            await server.run(read_stream, write_stream, server.create_initialization_options())
        logger.info("SSE client disconnected")
        return Response()

    app.add_route(SSE_PATH, handle_sse, methods=["GET"])
    app.mount(MESSAGES_PATH, app=sse.handle_post_message)
