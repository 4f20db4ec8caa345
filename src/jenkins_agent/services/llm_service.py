from typing import Any

from jenkins_agent.app.config import ANALYSIS_MAX_OUTPUT_TOKENS, CHAT_TEMPERATURE
from jenkins_agent.infrastructure.data_models import Message, Session
from jenkins_agent.infrastructure.openai_gpt_manager import OpenAIChat
from jenkins_agent.services.renderer_service import render_prompt


def system_primer() -> str:
    return render_prompt("system")


def chat_reply(session: Session, llm: OpenAIChat) -> dict[str, Any]:
    """Ask the model for the next assistant reply over the whole conversation."""
    return llm.generate(messages=list(session.messages), temperature=CHAT_TEMPERATURE)


def analyze_log(log_text: str, llm: OpenAIChat) -> str:
    """
    Summarize a console log in an isolated request.

    The conversation history is not sent, only the fixed analysis instruction and the log.
    """
    response = llm.generate(
        messages=[
            Message(role="system", content=render_prompt("analysis")),
            Message(role="user", content=log_text),
        ],
        max_output_tokens=ANALYSIS_MAX_OUTPUT_TOKENS,
    )
    return str(response["content"])
