from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import ExitStack, asynccontextmanager
from typing import Any

import mcp.types as types
from anyio.from_thread import BlockingPortal, start_blocking_portal
from mcp import ClientSession
from mcp.client.sse import sse_client

from jenkins_agent.app.config import CLIENT_NAME, CLIENT_VERSION
from jenkins_agent.infrastructure.data_models import ToolResult
from jenkins_agent.services.renderer_service import to_tool_result
from jenkins_shared.platform_manager import create_logger

logger = create_logger(logger_name="jenkins-agent")


class GatewayClient:
    """
    Synchronous handle on an MCP session with the Jenkins gateway.

    The SSE transport and the MCP session run on a worker thread behind an anyio
    blocking portal. `connect` returns once the initialize handshake is complete,
    so no tool call is issued before the transport is ready. Calls are made one at
    a time from the REPL thread.
    """

    def __init__(self, url: str) -> None:
        self.url = url
        self.server_info: types.InitializeResult | None = None
        self._stack = ExitStack()
        self._portal: BlockingPortal | None = None
        self._session: ClientSession | None = None

    def __enter__(self) -> GatewayClient:
        self.connect()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    @asynccontextmanager
    async def _open_session(self) -> AsyncIterator[ClientSession]:
        async with sse_client(self.url) as (read_stream, write_stream):
            async with ClientSession(
                read_stream,
                write_stream,
                client_info=types.Implementation(name=CLIENT_NAME, version=CLIENT_VERSION),
            ) as session:
                self.server_info = await session.initialize()
                yield session

    def connect(self) -> types.InitializeResult:
        """Open the SSE stream and perform the MCP initialize handshake."""
        if self._session is not None and self.server_info is not None:
            return self.server_info

        logger.info(f"Connecting to MCP server at {self.url}")
        try:
            self._portal = self._stack.enter_context(start_blocking_portal())
            self._session = self._stack.enter_context(
                self._portal.wrap_async_context_manager(self._open_session())
            )
        except Exception as e:
            self._stack.close()
            self._portal = None
            self._session = None
            raise RuntimeError(f"MCP connection to {self.url} failed: {e}") from e

        assert self.server_info is not None
        logger.info(
            f"MCP initialized. Server: {self.server_info.serverInfo.name} "
            f"{self.server_info.serverInfo.version} "
            f"(protocol {self.server_info.protocolVersion})"
        )
        return self.server_info

    def _require_session(self) -> tuple[BlockingPortal, ClientSession]:
        if self._portal is None or self._session is None:
            raise RuntimeError("MCP session is not connected")
        return self._portal, self._session

    def list_tools(self) -> list[types.Tool]:
        portal, session = self._require_session()
        result = portal.call(session.list_tools)
        return list(result.tools)

    def tool_schemas(self) -> dict[str, dict[str, Any]]:
        """Input schemas of the gateway's tools keyed by tool name."""
        return {tool.name: tool.inputSchema for tool in self.list_tools()}

    def call_tool(self, name: str, arguments: dict[str, Any]) -> ToolResult:
        """
        Call a gateway tool.

        Tool failures come back as an error ToolResult; transport failures raise.
        """
        portal, session = self._require_session()
        logger.info(f"Calling MCP tool {name}")
        result = portal.call(session.call_tool, name, arguments)
        return to_tool_result(result)

    def close(self) -> None:
        self._stack.close()
        self._portal = None
        self._session = None
