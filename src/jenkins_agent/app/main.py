import argparse
import sys
from typing import TextIO

from jenkins_agent.app.config import get_settings
from jenkins_agent.app.process_turn import TurnContext, handle_turn
from jenkins_agent.infrastructure.data_models import Session
from jenkins_agent.infrastructure.openai_gpt_manager import OpenAIChat
from jenkins_agent.services.llm_service import system_primer
from jenkins_agent.services.mcp_client_service import GatewayClient
from jenkins_shared.errors import ConfigError
from jenkins_shared.platform_manager import create_logger


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="jenkins-agent", description="Chat with Jenkins through the Jenkins MCP server."
    )
    parser.add_argument("--mcp-url", help="MCP server SSE URL (default: MCP_SERVER_URL)")
    parser.add_argument("--log-level", help="Logging level (default: LOG_LEVEL)")
    return parser.parse_args(argv)


def run_repl(session: Session, ctx: TurnContext, stdin: TextIO = sys.stdin) -> None:
    """Read prompts until end of input, handling each line as one turn."""
    ctx.out("Jenkins LLM Bridge started. Type your prompts:")
    while True:
        sys.stdout.write("> ")
        sys.stdout.flush()
        line = stdin.readline()
        if not line:
            break

        line = line.strip()
        if not line:
            continue

        handle_turn(session, line, ctx)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    try:
        settings = get_settings()
    except ConfigError as e:
        create_logger(logger_name="jenkins-agent").error(f"Configuration error: {e}")
        return 1

    logger = create_logger(
        logger_name="jenkins-agent", log_level=args.log_level or settings.log_level
    )
    logger.info("Starting Jenkins Agent")

    chat_llm = OpenAIChat(model=settings.chat_model, api_key=settings.openai_api_key)
    analysis_llm = OpenAIChat(model=settings.analysis_model, api_key=settings.openai_api_key)

    gateway = GatewayClient(args.mcp_url or settings.mcp_server_url)
    try:
        init = gateway.connect()
    except RuntimeError as e:
        logger.error(e)
        return 1

    try:
        print(f"MCP initialized. Server: {init.serverInfo.name} {init.serverInfo.version}")
        ctx = TurnContext(
            gateway=gateway,
            chat_llm=chat_llm,
            analysis_llm=analysis_llm,
            schemas=gateway.tool_schemas(),
        )
        run_repl(Session.with_primer(system_primer()), ctx)
    finally:
        gateway.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
