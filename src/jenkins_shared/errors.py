"""
Error types raised by the gateway and the bridge.

Bad input is a ValueError and failed calls are a RuntimeError, so callers that
only know the built-in hierarchy still handle them sensibly.
"""


class ConfigError(ValueError):
    """A required setting or secret is missing. Fatal at startup."""


class InvalidArgument(ValueError):
    """A tool argument is missing or malformed."""


class DirectiveParseError(ValueError):
    """A model reply looked like a tool directive but could not be parsed."""


class UpstreamError(RuntimeError):
    """Jenkins answered with a non-2xx status or could not be reached."""

    def __init__(self, status_code: int | None, body: str) -> None:
        self.status_code = status_code
        self.body = body
        if status_code is None:
            super().__init__(f"jenkins error: {body}")
        else:
            super().__init__(f"jenkins error: status={status_code} body={body}")
