from typing import Any, Protocol, cast

from openai import OpenAI

from jenkins_agent.infrastructure.data_models import Message


# Define response type directly because pyright is not correctly understanding the Responses API
class Response(Protocol):
    output_text: str | None
    output: list[Any]
    usage: Any
    model: str
    error: Any | None
    incomplete_details: Any | None


# Default configuration constants for GPT-5
DEFAULT_MAX_OUTPUT_TOKENS_GPT5 = 1000
DEFAULT_REASONING_EFFORT = "low"
DEFAULT_VERBOSITY = "low"
# Default configuration constants for earlier chat models
DEFAULT_MAX_OUTPUT_TOKENS = 1000
DEFAULT_TEMPERATURE = 0.2


class OpenAIChat:
    """
    A client for interacting with OpenAI's GPT models through the Responses API.

    Each call to `generate` makes exactly one request. Failures are raised, never retried.
    """

    def __init__(self, model: str, api_key: str) -> None:
        """
        Initialize the OpenAI chat client.

        Args:
            model: The OpenAI model to use (e.g., 'gpt-4o-mini', 'gpt-5')
            api_key: The OpenAI API key

        Raises:
            ValueError: If the API key is empty
        """
        if not api_key:
            raise ValueError("OPENAI_API_KEY not found in environment")

        self.client: OpenAI = OpenAI(api_key=api_key)
        self.model = model

    def _params_for_model(self, model: str, **kwargs: Any) -> dict[str, Any]:
        """
        Return default parameters based on model family.

        Args:
            model: The model name (e.g., 'gpt-4', 'gpt-5')
            **kwargs: Additional parameters to override defaults

        Returns:
            Dictionary of parameters for the specific model
        """
        if model.startswith("gpt-5"):
            # Reasoning models reject temperature
            return {
                "max_output_tokens": kwargs.get(
                    "max_output_tokens", DEFAULT_MAX_OUTPUT_TOKENS_GPT5
                ),
                "text": {"verbosity": kwargs.get("verbosity", DEFAULT_VERBOSITY)},
                "reasoning": {"effort": kwargs.get("reasoning_effort", DEFAULT_REASONING_EFFORT)},
            }

        return {
            "max_output_tokens": kwargs.get("max_output_tokens", DEFAULT_MAX_OUTPUT_TOKENS),
            "temperature": kwargs.get("temperature", DEFAULT_TEMPERATURE),
        }

    def generate(self, messages: list[Message], **kwargs: Any) -> dict[str, Any]:
        """
        Generate a text response from the OpenAI model.

        Args:
            messages: List of Message objects to send to the model
            **kwargs: Additional parameters to pass to the model

        Returns:
            Dictionary containing:
                - content: The generated text response
                - usage: Token usage information
                - parameters: Parameters used for the request
                - model_version: Model version reported by the API

        Raises:
            RuntimeError: If the request fails or the model returns no text
        """
        # Format messages to OpenAI format
        input_messages = [m.__dict__ for m in messages]

        request_params = self._params_for_model(model=self.model, **kwargs)

        try:
            resp = cast(
                Response,
                self.client.responses.create(
                    model=self.model,
                    input=cast(Any, input_messages),
                    **request_params,
                ),
            )
        except Exception as e:
            raise RuntimeError(f"Fatal error calling {self.model}: {e}") from e

        content = getattr(resp, "output_text", None)
        if not content:
            raise RuntimeError(f"Empty response from {self.model}")

        # Extract usage information
        u = getattr(resp, "usage", None)
        usage = {
            "input_tokens": getattr(u, "input_tokens", 0),
            "output_tokens": getattr(u, "output_tokens", 0),
            "total_tokens": getattr(u, "total_tokens", 0),
        }

        return {
            "content": content,
            "usage": usage,
            "parameters": request_params,
            "model_version": getattr(resp, "model", None),
        }
