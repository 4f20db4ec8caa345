import argparse
import sys

import uvicorn

from jenkins_mcp.app.config import SERVER_NAME, SERVER_VERSION, get_settings
from jenkins_mcp.fast_api_server.server import app
from jenkins_shared.errors import ConfigError
from jenkins_shared.platform_manager import create_logger


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="jenkins-mcp", description="Serve Jenkins job control as MCP tools over SSE."
    )
    parser.add_argument("--host", help="Interface to bind (default: MCP_SERVER_HOST)")
    parser.add_argument("--port", type=int, help="Port to bind (default: MCP_SERVER_PORT)")
    parser.add_argument("--log-level", help="Logging level (default: LOG_LEVEL)")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    try:
        settings = get_settings()
    except ConfigError as e:
        logger = create_logger(logger_name="jenkins-mcp")
        logger.error(f"Configuration error: {e}")
        return 1

    log_level = args.log_level or settings.log_level
    logger = create_logger(logger_name="jenkins-mcp", log_level=log_level)
    logger.info(f"Starting {SERVER_NAME} {SERVER_VERSION} against {settings.jenkins_url}")

    host = args.host or settings.host
    port = args.port or settings.port
    logger.info(f"starting SSE server on {host}:{port}")

    uvicorn.run(app, host=host, port=port, log_level=log_level.lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())
