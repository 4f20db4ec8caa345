from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Protocol

from jenkins_agent.app.logging import log_model_response, log_tool_request
from jenkins_agent.infrastructure.data_models import (
    ANALYZE_LOGS,
    TOOL_NAMES,
    Session,
    ToolRequest,
    ToolResult,
)
from jenkins_agent.infrastructure.openai_gpt_manager import OpenAIChat
from jenkins_agent.services.directive_service import detect_directive
from jenkins_agent.services.llm_service import analyze_log, chat_reply
from jenkins_agent.services.validation_service import validate_arguments
from jenkins_shared.errors import InvalidArgument
from jenkins_shared.platform_manager import create_logger

logger = create_logger(logger_name="jenkins-agent")


class ToolGateway(Protocol):
    def call_tool(self, name: str, arguments: dict[str, Any]) -> ToolResult: ...


@dataclass
class TurnContext:
    """Collaborators used while handling a turn."""

    gateway: ToolGateway
    chat_llm: OpenAIChat
    analysis_llm: OpenAIChat
    schemas: dict[str, dict[str, Any]] = field(default_factory=dict)
    out: Callable[[str], None] = print


def _arguments_valid(request: ToolRequest, tool_name: str, ctx: TurnContext) -> bool:
    schema = ctx.schemas.get(tool_name)
    if schema is None:
        return True
    try:
        validate_arguments(request.arguments, schema)
    except InvalidArgument as e:
        logger.error(f"Invalid arguments for {request.name}: {e}")
        ctx.out(f"Invalid arguments for {request.name}: {e}")
        return False
    return True


def _call_gateway(name: str, arguments: dict[str, Any], ctx: TurnContext) -> ToolResult | None:
    """Call the gateway; report failures and return None for them."""
    try:
        result = ctx.gateway.call_tool(name, arguments)
    except Exception as e:
        logger.error(f"MCP call error: {e}")
        ctx.out(f"MCP call error: {e}")
        return None

    if result.is_error:
        logger.error(f"Tool {name} returned an error: {result.error}")
        ctx.out(f"Tool error: {result.error}")
        return None
    return result


def _run_tool(session: Session, request: ToolRequest, ctx: TurnContext) -> None:
    if not _arguments_valid(request, request.name, ctx):
        return

    result = _call_gateway(request.name, request.arguments, ctx)
    if result is None:
        return

    output = result.render()
    ctx.out(f"→ Tool result: {output}")
    session.append("assistant", f"[Tool output]: {output}")


def _run_log_analysis(session: Session, request: ToolRequest, ctx: TurnContext) -> None:
    # analyze_logs takes the same arguments as get_console_log
    if not _arguments_valid(request, "get_console_log", ctx):
        return

    result = _call_gateway("get_console_log", request.arguments, ctx)
    if result is None:
        return

    ctx.out("→ Jenkins logs fetched, sending to OpenAI...")
    try:
        analysis = analyze_log(result.render(), ctx.analysis_llm)
    except RuntimeError as e:
        logger.error(f"OpenAI log analysis error: {e}")
        ctx.out(f"OpenAI log analysis error: {e}")
        return

    ctx.out(f"Analysis: {analysis}")
    session.append("assistant", f"[Log analysis]: {analysis}")


def handle_turn(session: Session, line: str, ctx: TurnContext) -> None:
    """
    Handle one line of user input.

    The user turn is always recorded. An assistant turn is added for plain replies,
    successful tool calls and completed log analyses; failed calls add nothing.
    """
    session.append("user", line)

    try:
        response = chat_reply(session, ctx.chat_llm)
    except RuntimeError as e:
        logger.error(f"OpenAI error: {e}")
        ctx.out(f"OpenAI error: {e}")
        return

    log_model_response(response, logger)
    reply = str(response["content"])
    ctx.out(f"LLM: {reply}")

    request = detect_directive(reply)
    if request is None or request.name not in TOOL_NAMES:
        session.append("assistant", reply)
        return

    log_tool_request(request, logger)
    ctx.out(f"→ Detected MCP tool call: {request.name} {request.arguments}")

    if request.name == ANALYZE_LOGS:
        _run_log_analysis(session, request, ctx)
    else:
        _run_tool(session, request, ctx)
