from typing import Any

import pytest

from jenkins_agent.app.process_turn import TurnContext, handle_turn
from jenkins_agent.infrastructure.data_models import Message, Session, ToolResult
from jenkins_mcp.protocol.schemas import LIST

SCHEMAS = {name: tool["input_schema"] for name, tool in LIST.items()}


class FakeLLM:
    def __init__(self, *replies: str, error: Exception | None = None) -> None:
        self.replies = list(replies)
        self.error = error
        self.calls: list[tuple[list[Message], dict[str, Any]]] = []

    def generate(self, messages: list[Message], **kwargs: Any) -> dict[str, Any]:
        self.calls.append((list(messages), kwargs))
        if self.error:
            raise self.error
        return {"content": self.replies.pop(0), "usage": {}, "model_version": "fake"}


class FakeGateway:
    def __init__(self, result: ToolResult | None = None, error: Exception | None = None) -> None:
        self.result = result or ToolResult(text="ok")
        self.error = error
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def call_tool(self, name: str, arguments: dict[str, Any]) -> ToolResult:
        self.calls.append((name, arguments))
        if self.error:
            raise self.error
        return self.result


@pytest.fixture
def session() -> Session:
    return Session.with_primer("primer")


def make_ctx(gateway, chat, analysis=None, output=None) -> TurnContext:
    return TurnContext(
        gateway=gateway,
        chat_llm=chat,
        analysis_llm=analysis or FakeLLM(),
        schemas=SCHEMAS,
        out=(output if output is not None else []).append,
    )


def roles(session: Session) -> list[str]:
    return [m.role for m in session.messages]


def test_plain_reply_is_appended(session) -> None:
    gateway = FakeGateway()
    chat = FakeLLM("Hello! How can I help?")

    handle_turn(session, "hi", make_ctx(gateway, chat))

    assert session.messages[1:] == [
        Message(role="user", content="hi"),
        Message(role="assistant", content="Hello! How can I help?"),
    ]
    assert gateway.calls == []
    # The whole conversation is sent, primer first
    sent, kwargs = chat.calls[0]
    assert [m.content for m in sent] == ["primer", "hi"]
    assert kwargs["temperature"] == 0.2


def test_tool_directive_dispatches_and_records_output(session) -> None:
    gateway = FakeGateway(ToolResult(text="job triggered successfully!"))
    output: list[str] = []
    chat = FakeLLM('TOOL: trigger_job {"job_name":"demo-job"}')

    handle_turn(session, "run demo-job", make_ctx(gateway, chat, output=output))

    assert gateway.calls == [("trigger_job", {"job_name": "demo-job"})]
    assert session.messages[-1] == Message(
        role="assistant", content="[Tool output]: job triggered successfully!"
    )
    assert any("job triggered successfully!" in line for line in output)


def test_python_style_none_parameters_are_dispatched(session) -> None:
    gateway = FakeGateway(ToolResult(text="job triggered successfully!"))
    chat = FakeLLM('TOOL: trigger_job {"job_name": "demo", "parameters": None}')

    handle_turn(session, "run demo", make_ctx(gateway, chat))

    assert gateway.calls == [("trigger_job", {"job_name": "demo", "parameters": None})]
    assert session.messages[-1].content == "[Tool output]: job triggered successfully!"


def test_structured_tool_result_is_rendered(session) -> None:
    gateway = FakeGateway(ToolResult(structured={"result": "SUCCESS"}))
    chat = FakeLLM('TOOL: get_build_status {"job_name": "demo-job"}')

    handle_turn(session, "status of demo-job", make_ctx(gateway, chat))

    assert session.messages[-1].content.startswith("[Tool output]: {")
    assert '"result": "SUCCESS"' in session.messages[-1].content


def test_upstream_error_is_printed_and_not_recorded(session) -> None:
    gateway = FakeGateway(ToolResult(error="jenkins error: status=500 body=no such job"))
    output: list[str] = []
    chat = FakeLLM('TOOL: trigger_job {"job_name": "missing-job"}')

    handle_turn(session, "run missing-job", make_ctx(gateway, chat, output=output))

    assert roles(session) == ["system", "user"]
    assert any("500" in line and "no such job" in line for line in output)


def test_transport_failure_is_printed_and_not_recorded(session) -> None:
    gateway = FakeGateway(error=ConnectionError("stream closed"))
    output: list[str] = []
    chat = FakeLLM('TOOL: get_build_status {"job_name": "demo-job"}')

    handle_turn(session, "status", make_ctx(gateway, chat, output=output))

    assert roles(session) == ["system", "user"]
    assert any("stream closed" in line for line in output)


def test_invalid_arguments_are_not_dispatched(session) -> None:
    gateway = FakeGateway()
    output: list[str] = []
    chat = FakeLLM('TOOL: get_console_log {"job_name": "demo-job"}')

    handle_turn(session, "logs for demo-job", make_ctx(gateway, chat, output=output))

    assert gateway.calls == []
    assert roles(session) == ["system", "user"]
    assert any("build_number" in line for line in output)


def test_malformed_directive_is_kept_as_text(session) -> None:
    gateway = FakeGateway()
    reply = 'TOOL: trigger_job {"job_name": "demo-job"'
    chat = FakeLLM(reply)

    handle_turn(session, "run demo-job", make_ctx(gateway, chat))

    assert gateway.calls == []
    assert session.messages[-1] == Message(role="assistant", content=reply)


def test_unknown_tool_is_kept_as_text(session) -> None:
    gateway = FakeGateway()
    reply = 'TOOL: delete_job {"job_name": "demo-job"}'

    handle_turn(session, "delete demo-job", make_ctx(gateway, FakeLLM(reply)))

    assert gateway.calls == []
    assert session.messages[-1].content == reply


def test_analyze_logs_fetches_log_and_runs_isolated_analysis(session) -> None:
    gateway = FakeGateway(ToolResult(text="ERROR: compilation failed"))
    chat = FakeLLM('TOOL: analyze_logs {"job_name": "demo-job", "build_number": 7}')
    analysis = FakeLLM("The build failed because compilation failed.")

    handle_turn(session, "why did build 7 fail?", make_ctx(gateway, chat, analysis))

    assert gateway.calls == [("get_console_log", {"job_name": "demo-job", "build_number": 7})]
    sent, kwargs = analysis.calls[0]
    assert [m.role for m in sent] == ["system", "user"]
    assert sent[1].content == "ERROR: compilation failed"
    assert "primer" not in [m.content for m in sent]
    assert kwargs["max_output_tokens"] == 500
    assert session.messages[-1] == Message(
        role="assistant",
        content="[Log analysis]: The build failed because compilation failed.",
    )


def test_analyze_logs_stops_when_log_fetch_fails(session) -> None:
    gateway = FakeGateway(ToolResult(error="invalid build_number string"))
    chat = FakeLLM('TOOL: analyze_logs {"job_name": "demo-job", "build_number": "last"}')
    analysis = FakeLLM("unused")

    handle_turn(session, "analyze", make_ctx(gateway, chat, analysis))

    assert analysis.calls == []
    assert roles(session) == ["system", "user"]


def test_analysis_model_failure_is_reported(session) -> None:
    gateway = FakeGateway(ToolResult(text="log"))
    chat = FakeLLM('TOOL: analyze_logs {"job_name": "demo-job", "build_number": 1}')
    analysis = FakeLLM(error=RuntimeError("rate limited"))
    output: list[str] = []

    handle_turn(session, "analyze", make_ctx(gateway, chat, analysis, output))

    assert roles(session) == ["system", "user"]
    assert any("rate limited" in line for line in output)


def test_chat_model_failure_keeps_user_turn(session) -> None:
    output: list[str] = []
    chat = FakeLLM(error=RuntimeError("Fatal error calling gpt-4: boom"))

    handle_turn(session, "hello", make_ctx(FakeGateway(), chat, output=output))

    assert roles(session) == ["system", "user"]
    assert output == ["OpenAI error: Fatal error calling gpt-4: boom"]


def test_history_accumulates_across_turns(session) -> None:
    gateway = FakeGateway(ToolResult(text="job triggered successfully!"))
    chat = FakeLLM("Hi!", 'TOOL: trigger_job {"job_name": "demo-job"}')
    ctx = make_ctx(gateway, chat)

    handle_turn(session, "hello", ctx)
    handle_turn(session, "run demo-job", ctx)

    assert roles(session) == ["system", "user", "assistant", "user", "assistant"]
    second_call_messages, _ = chat.calls[1]
    assert [m.content for m in second_call_messages] == ["primer", "hello", "Hi!", "run demo-job"]
