"""
LLM client for structured (JSON schema) chat completions.

Both model-backed services (grant extraction and grant matching) go through
this client so the request shape, token accounting and refusal handling live
in one place.

Environment:
    OPENAI_API_KEY must be set
    GRANT_MATCHER_MODEL selects the model (default: gpt-4o-mini)

Usage:
    from grant_matcher.llm.client import LLMClient

    client = LLMClient()
    data = client.chat_json(messages, "grant_details", GRANT_EXTRACTION_SCHEMA)
"""

import json
import logging
from typing import Any, Dict, List, Optional

from openai import OpenAI

from grant_matcher.core import config
from grant_matcher.core.errors import ConfigurationError
from grant_matcher.core.schemas import response_format


logger = logging.getLogger(__name__)


class LLMClient:
    """Thin wrapper over OpenAI chat completions that returns parsed JSON."""

    def __init__(
        self,
        model: Optional[str] = None,
        api_key: Optional[str] = None,
        max_tokens: Optional[int] = None,
        client: Optional[Any] = None,
    ):
        """
        Initialize LLM client.

        Args:
            model: OpenAI model name (default: GRANT_MATCHER_MODEL)
            api_key: API key (default: OPENAI_API_KEY)
            max_tokens: Completion token cap per request
            client: Pre-built OpenAI-compatible client (skips key lookup)

        Raises:
            ConfigurationError: If no API key is available
        """
        if client is None:
            api_key = api_key or config.OPENAI_API_KEY
            if not api_key:
                raise ConfigurationError(
                    "OPENAI_API_KEY environment variable not set. "
                    "Get your key from: https://platform.openai.com/api-keys"
                )
            client = OpenAI(api_key=api_key)

        self.client = client
        self.model = model or config.MODEL
        self.max_tokens = max_tokens or config.LLM_MAX_TOKENS

        logger.info(f"LLM client initialized: {self.model}")

    def _uses_completion_tokens(self) -> bool:
        # Reasoning models reject max_tokens/temperature
        return self.model.startswith(("gpt-5", "o1", "o3", "o4"))

    def chat_json(
        self,
        messages: List[Dict[str, Any]],
        schema_name: str,
        schema: Dict[str, Any],
        max_tokens: Optional[int] = None,
    ) -> Dict[str, Any]:
        """
        Send a chat completion constrained to a JSON schema.

        Args:
            messages: Chat messages; user content may be a list of parts
            schema_name: Name reported to the API for the schema
            schema: Strict JSON schema for the response object
            max_tokens: Override the client's token cap

        Returns:
            Parsed JSON object

        Raises:
            ValueError: If the model refuses or returns no/invalid JSON
            openai.OpenAIError: If the API call fails
        """
        params: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "response_format": response_format(schema_name, schema),
        }

        token_cap = max_tokens or self.max_tokens
        if self._uses_completion_tokens():
            params["max_completion_tokens"] = token_cap
        else:
            params["max_tokens"] = token_cap
            params["temperature"] = 0

        try:
            response = self.client.chat.completions.create(**params)
        except Exception as e:
            logger.error(f"API call failed with {self.model}: {e}")
            raise

        if response.usage:
            logger.info(
                f"Token usage - Model: {self.model}, "
                f"Input: {response.usage.prompt_tokens}, "
                f"Output: {response.usage.completion_tokens}"
            )

        choice = response.choices[0]
        message = choice.message
        logger.debug(f"Finish reason: {choice.finish_reason}")

        refusal = getattr(message, "refusal", None)
        if refusal:
            raise ValueError(f"Model refused to respond: {refusal}")

        if not message.content:
            raise ValueError("Model returned empty content")

        if choice.finish_reason == "length":
            raise ValueError(f"Response truncated at {token_cap} tokens")

        try:
            return json.loads(message.content)
        except json.JSONDecodeError as e:
            raise ValueError(f"Model returned invalid JSON: {e}") from e


# Singleton instance
_client = None


def get_llm_client() -> LLMClient:
    """Get or create the global LLM client."""
    global _client
    if _client is None:
        _client = LLMClient()
    return _client
