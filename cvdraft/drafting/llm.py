"""Model gateway for the Drafting module.

Single entry point for every LLM call: free-text instructions plus a message
list in, raw text or a schema-validated Pydantic model out. Uses LiteLLM so
any provider it supports can be configured.
"""

from __future__ import annotations

import json
import logging
import os
import warnings
from typing import Any, TypeVar, overload

from litellm import Timeout, acompletion
from pydantic import BaseModel, ValidationError

from cvdraft.drafting.config import DraftingConfig, get_drafting_config

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

Message = dict[str, str]

warnings.filterwarnings(
    "ignore",
    message=r"(?s)^Pydantic serializer warnings:.*",
    category=UserWarning,
)

# LiteLLM loads `.env` into the process environment in DEV mode.
os.environ.setdefault("LITELLM_MODE", "PRODUCTION")


class ModelGatewayError(Exception):
    """Base class for failures of a model call."""

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.original_error = original_error


class MalformedModelOutput(ModelGatewayError):
    """The model reply is empty, not JSON, or does not match the schema."""


class ModelTransportError(ModelGatewayError):
    """The request never produced a reply (network, auth, timeout, ...)."""


class ModelGateway:
    """LLM gateway with optional structured output.

    There are no retries here; a failed call is fatal to the current attempt
    and the retry policy is left to the scheduler.
    """

    def __init__(self, config: DraftingConfig | None = None):
        """Initialize the gateway.

        Args:
            config: Optional DraftingConfig. Uses global config if not provided.
        """
        self.config = config or get_drafting_config()
        self._setup_provider_env()

    def _setup_provider_env(self) -> None:
        """Set up provider-specific environment variables.

        Anthropic reads a custom base URL from the environment rather than
        from a call parameter.
        """
        if self.config.llm_base_url and self.config.llm_provider == "anthropic":
            # Anthropic SDK appends /v1 itself
            base_url = self.config.llm_base_url.rstrip("/")
            if base_url.endswith("/v1"):
                base_url = base_url[:-3]
            os.environ["ANTHROPIC_BASE_URL"] = base_url
            if self.config.llm_api_key:
                os.environ["ANTHROPIC_API_KEY"] = self.config.llm_api_key

    def _get_model_name(self) -> str:
        """Get the model name formatted for LiteLLM.

        Returns:
            Model name with provider prefix if needed.
        """
        if self.config.llm_provider == "anthropic":
            if "/" in self.config.llm_model:
                return self.config.llm_model
            return f"anthropic/{self.config.llm_model}"

        # Custom base URLs (local models, proxies) go through the
        # OpenAI-compatible route
        if self.config.llm_base_url:
            if "/" in self.config.llm_model:
                return self.config.llm_model
            return f"openai/{self.config.llm_model}"

        if self.config.llm_provider == "openai":
            return self.config.llm_model

        return f"{self.config.llm_provider}/{self.config.llm_model}"

    @overload
    async def invoke(
        self,
        messages: list[Message],
        *,
        instructions: str | None = None,
        output_model: None = None,
        web_search: bool = False,
    ) -> str: ...

    @overload
    async def invoke(
        self,
        messages: list[Message],
        *,
        instructions: str | None = None,
        output_model: type[T],
        web_search: bool = False,
    ) -> T: ...

    async def invoke(
        self,
        messages: list[Message],
        *,
        instructions: str | None = None,
        output_model: type[T] | None = None,
        web_search: bool = False,
    ) -> str | T:
        """Send one request to the model.

        Args:
            messages: Chat messages (role/content dictionaries).
            instructions: Optional instructions, sent as a leading system message.
            output_model: Pydantic model the reply must validate against. When
                omitted the reply is returned as opaque text.
            web_search: Allow the model to search the web, if enabled in config.

        Returns:
            The validated model instance, or the reply text.

        Raises:
            ModelTransportError: If the request fails or times out.
            MalformedModelOutput: If the reply is empty or fails validation.
        """
        request_messages: list[Message] = []
        if instructions:
            request_messages.append({"role": "system", "content": instructions})
        request_messages.extend(messages)

        try:
            response = await self._call_completion(
                messages=request_messages,
                response_format=output_model,
                web_search=web_search,
            )
        except Timeout as e:
            raise ModelTransportError(
                f"LLM request timed out (timeout={self.config.llm_timeout}s). "
                "Increase `DRAFTING_LLM_TIMEOUT` or use a faster model.",
                e,
            ) from e
        except Exception as e:
            raise ModelTransportError(f"LLM call failed: {e}", e) from e

        if self.config.debug:
            logger.debug("LLM response: %s", _dump_response(response))

        content = self._extract_content(response)
        if output_model is None:
            return content
        return self._parse_structured(content, output_model)

    async def _call_completion(
        self,
        *,
        messages: list[Message],
        response_format: type[BaseModel] | None = None,
        web_search: bool = False,
    ):
        """Make the actual LLM API call.

        Returns:
            LiteLLM completion response.
        """
        kwargs: dict[str, Any] = {
            "model": self._get_model_name(),
            "messages": messages,
            "temperature": self.config.llm_temperature,
            "timeout": self.config.llm_timeout,
        }

        if web_search and self.config.llm_web_search:
            kwargs["web_search_options"] = {
                "search_context_size": "medium",
                "user_location": {
                    "type": "approximate",
                    "approximate": {"country": self.config.web_search_country},
                },
            }

        # Base URL for Anthropic is set via env var in _setup_provider_env()
        if self.config.llm_base_url and self.config.llm_provider != "anthropic":
            kwargs["base_url"] = self.config.llm_base_url

        if response_format is not None:
            kwargs["response_format"] = response_format

        if self.config.debug:
            logger.debug(
                "LLM request: %s",
                json.dumps(_describe_request(kwargs), indent=2, default=str),
            )

        # Added after the debug dump so the key never reaches the logs
        if self.config.llm_api_key:
            kwargs["api_key"] = self.config.llm_api_key

        return await acompletion(**kwargs)

    def _extract_content(self, response) -> str:
        choices = getattr(response, "choices", None)
        if not choices:
            raise MalformedModelOutput("LLM returned no choices.")
        message = choices[0].message
        content = getattr(message, "content", None)

        # Some providers return structured output as tool call arguments.
        if content is None:
            tool_calls = getattr(message, "tool_calls", None) or []
            if tool_calls:
                function = getattr(tool_calls[0], "function", None)
                arguments = getattr(function, "arguments", None)
                if isinstance(arguments, str) and arguments.strip():
                    content = arguments

        if content is None:
            raise MalformedModelOutput("LLM returned no content.")
        return str(content)

    def _parse_structured(self, content: str, output_model: type[T]) -> T:
        """Validate the reply against the output model.

        Raises:
            MalformedModelOutput: If parsing or validation fails.
        """
        content = _strip_code_fences(content)
        try:
            return output_model.model_validate_json(content)
        except ValidationError as e:
            raise MalformedModelOutput(
                f"LLM response does not match {output_model.__name__}: {e}", e
            ) from e


def _strip_code_fences(content: str) -> str:
    """Remove a surrounding ```json ... ``` fence, if present."""
    content = content.strip()
    if content.startswith("```"):
        first_newline = content.find("\n")
        if first_newline != -1:
            content = content[first_newline + 1 :]
        if content.endswith("```"):
            content = content[:-3]
        content = content.strip()
    return content


def _describe_request(kwargs: dict[str, Any]) -> dict[str, Any]:
    described = dict(kwargs)
    response_format = described.get("response_format")
    if isinstance(response_format, type) and issubclass(response_format, BaseModel):
        described["response_format"] = response_format.model_json_schema()
    return described


def _dump_response(response: Any) -> str:
    model_dump_json = getattr(response, "model_dump_json", None)
    if callable(model_dump_json):
        return model_dump_json()
    return str(response)
