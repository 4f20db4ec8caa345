import json
import os
from collections.abc import Sequence
from typing import Any

import mcp.types as types

from jenkins_agent.infrastructure.data_models import ToolResult


def render_prompt(name: str) -> str:
    # Prompts live next to the package in prompts/<name>.md
    current_dir = os.path.dirname(os.path.abspath(__file__))
    prompts_path = os.path.join(current_dir, "..", "prompts", f"{name}.md")
    with open(prompts_path, encoding="utf-8") as f:
        return f.read().strip()


def flatten_content(contents: Sequence[Any]) -> str:
    """
    Flatten MCP content items into plain text.

    Text items are used verbatim; any other item (images, resources) is dumped as JSON.
    """
    parts: list[str] = []
    for item in contents:
        if isinstance(item, types.TextContent):
            parts.append(item.text)
        elif hasattr(item, "model_dump"):
            parts.append(json.dumps(item.model_dump(mode="json", exclude_none=True)))
        else:
            parts.append(json.dumps(item, default=str))
    return "\n".join(parts).strip()


def to_tool_result(result: types.CallToolResult) -> ToolResult:
    text = flatten_content(result.content)
    if result.isError:
        return ToolResult(error=text or "tool call failed")

    structured = result.structuredContent
    return ToolResult(text=text or None, structured=structured)
