import logging
from typing import Any

from jenkins_agent.infrastructure.data_models import ToolRequest


def log_model_response(response: dict[str, Any], logger: logging.Logger) -> None:
    logger.info(f"Reply created by model: {response.get('model_version', 'Unknown')}")
    logger.info(f"Usage: {response.get('usage', 'Unknown')}")


def log_tool_request(request: ToolRequest, logger: logging.Logger) -> None:
    logger.info(f"Tool name: {request.name}")
    logger.info(f"Arguments: {request.arguments}")
