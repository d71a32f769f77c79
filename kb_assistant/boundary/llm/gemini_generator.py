"""
Gemini text generator.

Executes a grounded prompt against a Google Gemini chat model and returns
plain text. Provider failures are mapped onto the generation error
taxonomy so callers can tell transport, provider, envelope and timeout
failures apart.

Dependencies: langchain_google_genai, google.genai, httpx, python-dotenv
System role: Generation capability adapter
"""

import asyncio
import logging

import httpx
from dotenv import load_dotenv
from google.genai.errors import APIError as GoogleAPIError
from langchain_core.messages import BaseMessage
from langchain_google_genai import ChatGoogleGenerativeAI
from langchain_google_genai.chat_models import ChatGoogleGenerativeAIError

from kb_assistant.core.exceptions import (
    GenerationProviderError,
    GenerationResponseError,
    GenerationTimeoutError,
    GenerationTransportError,
)

load_dotenv()

logger = logging.getLogger(__name__)


def extract_text(message: BaseMessage) -> str:
    """
    Pull plain text out of a chat model response.

    Handles both string content and the list-of-parts content some Gemini
    models return.

    Raises:
        GenerationResponseError: When the response carries no text
    """
    content = getattr(message, "content", None)
    if isinstance(content, list):
        text = "".join(
            item if isinstance(item, str) else str(item.get("text", ""))
            for item in content
            if isinstance(item, (str, dict))
        )
    elif isinstance(content, str):
        text = content
    else:
        raise GenerationResponseError(
            f"Unexpected response content type: {type(content).__name__}"
        )

    if not text.strip():
        raise GenerationResponseError("Generation response contained no text")
    return text


class GeminiGenerator:
    """Gemini chat model wrapper with a bounded call time."""

    def __init__(
        self,
        model: str = "gemini-2.5-flash",
        temperature: float = 0.2,
        timeout_seconds: float = 30.0,
        api_key: str | None = None,
    ) -> None:
        """
        Initialize the Gemini client.

        The client makes a single attempt per call (max_retries=1), so
        every provider failure reaches the caller.

        Args:
            model: Gemini model ID
            temperature: Sampling temperature
            timeout_seconds: Upper bound on a single call
            api_key: Gemini API key (falls back to GOOGLE_API_KEY when None)
        """
        self.model = model
        self._timeout_seconds = timeout_seconds

        kwargs = {}
        if api_key:
            kwargs["google_api_key"] = api_key

        self._llm = ChatGoogleGenerativeAI(
            model=model,
            temperature=temperature,
            max_retries=1,
            **kwargs,
        )
        logger.info(f"{__name__}:__init__ - Initialized with model={model}, temperature={temperature}")

    async def agenerate(self, prompt: str) -> str:
        """
        Generate a reply for a prompt.

        Args:
            prompt: Complete prompt text

        Returns:
            str: Generated reply

        Raises:
            GenerationTimeoutError: Call exceeded timeout_seconds
            GenerationProviderError: Provider returned an error payload
            GenerationTransportError: Provider could not be reached
            GenerationResponseError: Response carried no usable text
        """
        try:
            message = await asyncio.wait_for(
                self._llm.ainvoke(prompt),
                timeout=self._timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            raise GenerationTimeoutError(
                f"Generation timed out after {self._timeout_seconds}s",
                model=self.model,
            ) from e
        except (ChatGoogleGenerativeAIError, GoogleAPIError) as e:
            raise GenerationProviderError(str(e), model=self.model) from e
        except (ConnectionError, OSError, httpx.TransportError) as e:
            raise GenerationTransportError(
                f"Could not reach generation provider: {e}",
                model=self.model,
            ) from e

        return extract_text(message)
