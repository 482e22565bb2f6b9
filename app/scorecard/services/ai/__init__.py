"""
AI service package for scorecard extraction.

This package provides:
- prompts: Fixed instruction and per-request message construction
- response: Strategies for locating the model's text in a response

The AIService class sends a single request to the OpenAI Responses API and
returns the raw text the model produced.
"""

import logging
from typing import Any

import openai
from openai import AsyncOpenAI

from ...models import EncodedImage
from ..exceptions import ConfigurationError, UpstreamError
from .prompts import SCORECARD_INSTRUCTION, build_input, build_user_text
from .response import OUTPUT_TEXT_STRATEGIES, extract_output_text

logger = logging.getLogger(__name__)

__all__ = [
    "AIService",
    "OUTPUT_TEXT_STRATEGIES",
    "SCORECARD_INSTRUCTION",
    "build_input",
    "build_user_text",
    "extract_output_text",
]


class AIService:
    """
    Client for structured scorecard extraction with OpenAI.

    The credential is supplied at construction; a missing key only fails
    when the client is first needed.
    """

    def __init__(
        self,
        api_key: str | None,
        model: str = "gpt-4.1-mini",
        temperature: float = 0.2,
        timeout: float | None = None,
        client: Any | None = None,
    ):
        """
        Initialize the AI service.

        Args:
            api_key: OpenAI API key.
            model: OpenAI model to use (must support vision).
            temperature: Sampling temperature; kept low for repeatable output.
            timeout: Request timeout in seconds, None to wait indefinitely.
            client: Pre-built client, used instead of constructing one.
        """
        self.api_key = api_key
        self.model = model
        self.temperature = temperature
        self.timeout = timeout
        self._client = client

    def check_configured(self) -> None:
        """Raise ConfigurationError if no API key is available."""
        if self._client is None and not self.api_key:
            raise ConfigurationError("OPENAI_API_KEY not configured")

    @property
    def client(self) -> Any:
        """Lazy-load the OpenAI client."""
        if self._client is None:
            self.check_configured()
            self._client = AsyncOpenAI(
                api_key=self.api_key,
                timeout=self.timeout,
                max_retries=0,
            )
        return self._client

    async def complete(self, user_text: str, images: list[EncodedImage]) -> str:
        """
        Send the prompt and images to the model and return its text output.

        Args:
            user_text: Full user message text.
            images: Images to attach after the text, in order.

        Returns:
            The text the model produced, "" if none could be located.

        Raises:
            ConfigurationError: If no API key is configured.
            UpstreamError: If the API call fails or returns an error status.
        """
        logger.info(
            "Requesting extraction from %s (%d chars, %d image(s))",
            self.model,
            len(user_text),
            len(images),
        )

        try:
            response = await self.client.responses.create(
                model=self.model,
                temperature=self.temperature,
                input=build_input(user_text, images),
                text={"format": {"type": "json_object"}},
            )
        except openai.APIStatusError as e:
            logger.error("OpenAI returned status %d", e.status_code)
            raise UpstreamError("OpenAI error", details=e.response.text) from e
        except openai.APIError as e:
            logger.error("OpenAI request failed: %s", e)
            raise UpstreamError("OpenAI error", details=str(e)) from e

        text = extract_output_text(response)
        logger.info("Received %d characters from model", len(text))
        return text
