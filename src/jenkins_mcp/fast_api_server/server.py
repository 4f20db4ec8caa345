# Jenkins MCP service.
# Run with: jenkins-mcp --port 8081
# or:       uvicorn jenkins_mcp.fast_api_server.server:app --port 8081
#
# MCP clients connect to GET /sse. The /mcp/* routes expose the same tools over
# plain HTTP for discovery and manual testing.

import json
from typing import Any, cast

from anyio import to_thread
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from jenkins_mcp.protocol.manifest import manifest as build_manifest
from jenkins_mcp.protocol.mcp_server import (
    build_mcp_server,
    mount_sse_transport,
    to_call_result,
    to_error_result,
)
from jenkins_mcp.protocol.router import call_tool, list_tools
from jenkins_mcp.protocol.schemas import LIST
from jenkins_shared.errors import InvalidArgument, UpstreamError
from jenkins_shared.platform_manager import create_logger

logger = create_logger(logger_name="jenkins-mcp")

app: FastAPI = FastAPI(title="Jenkins MCP Service")
mount_sse_transport(app, build_mcp_server())


# --- MCP Discovery and Tools---
@app.get("/.well-known/mcp/manifest")
async def manifest(request: Request) -> JSONResponse:
    logger.info("Returning manifest")
    base_url = str(request.base_url).rstrip("/")
    return JSONResponse(build_manifest(base_url))


@app.get("/mcp/schemas")
async def schemas() -> JSONResponse:
    logger.info("Returning schemas")
    return JSONResponse(LIST)


@app.get("/mcp/tools")
async def tools() -> JSONResponse:
    logger.info("Returning tools")
    return JSONResponse({"tools": list_tools()})


@app.post("/mcp/tools/call", response_model=None)
async def tools_call(request: Request) -> JSONResponse | PlainTextResponse:
    logger.info("Tools call received")
    raw = await request.body()
    if not raw:
        return PlainTextResponse("Missing body", status_code=400)

    try:
        body = json.loads(raw)
    except json.JSONDecodeError:
        return PlainTextResponse("Body is not valid JSON", status_code=400)
    if not isinstance(body, dict):
        return PlainTextResponse("Body must be a JSON object", status_code=400)

    name = body.get("name")
    if not name or not isinstance(name, str):
        return PlainTextResponse("Missing tool name", status_code=400)

    args = body.get("arguments") or {}
    if isinstance(args, str):
        try:
            args = json.loads(args)
        except json.JSONDecodeError:
            return PlainTextResponse("Invalid arguments", status_code=400)
    if not isinstance(args, dict):
        return PlainTextResponse("Invalid arguments", status_code=400)

    args_dict = cast(dict[str, Any], args)

    try:
        result = await to_thread.run_sync(call_tool, name, args_dict)
    except (InvalidArgument, UpstreamError) as e:
        logger.error(f"Tool {name} failed: {e}")
        return JSONResponse(to_error_result(str(e)))

    return JSONResponse(to_call_result(result))


@app.get("/healthz")
def healthz() -> dict[str, bool]:
    return {"ok": True}
