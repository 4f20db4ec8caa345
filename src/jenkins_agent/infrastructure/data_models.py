"""
Shared data models.
"""

import json
from dataclasses import dataclass, field
from typing import Any

ANALYZE_LOGS = "analyze_logs"
GATEWAY_TOOLS = frozenset({"trigger_job", "get_build_status", "get_console_log"})
TOOL_NAMES = GATEWAY_TOOLS | {ANALYZE_LOGS}


@dataclass(frozen=True)
class Message:
    role: str  # "system" | "user" | "assistant"
    content: str


@dataclass(frozen=True)
class ToolRequest:
    name: str
    arguments: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ToolResult:
    """Outcome of a gateway call: text, a structured payload, or an error message."""

    text: str | None = None
    structured: dict[str, Any] | None = None
    error: str | None = None

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def render(self) -> str:
        if self.error is not None:
            return self.error
        if self.text:
            return self.text
        if self.structured is not None:
            return json.dumps(self.structured, indent=2)
        return ""


@dataclass
class Session:
    """In-memory conversation; messages are only ever appended."""

    messages: list[Message] = field(default_factory=list)

    @classmethod
    def with_primer(cls, system_prompt: str) -> "Session":
        return cls(messages=[Message(role="system", content=system_prompt)])

    def append(self, role: str, content: str) -> Message:
        message = Message(role=role, content=content)
        self.messages.append(message)
        return message
