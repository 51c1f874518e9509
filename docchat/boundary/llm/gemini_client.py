"""
Gemini generative model client.

Wraps ChatGoogleGenerativeAI for prompt completion and the google.genai
client for extraction calls that carry inline document bytes.
Errors are propagated untouched; callers classify quota failures.

Dependencies: langchain_google_genai, google.genai, asyncio
System role: Generative model adapter for chat and text extraction
"""

import asyncio
import logging
from typing import Any

from google import genai
from google.genai import types
from langchain_google_genai import ChatGoogleGenerativeAI

logger = logging.getLogger(__name__)


def message_text(content: Any) -> str:
    """
    Flatten LangChain message content into plain text.

    Args:
        content: str or list of str/dict content blocks

    Returns:
        str: Concatenated text parts
    """
    if isinstance(content, str):
        return content
    parts = []
    for block in content or []:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type", "text") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)


class GeminiClient:
    """
    Gemini client for chat answers and document text extraction.

    Underlying SDK clients are created on first use so the application can
    start without an API key and report the missing key through health.
    """

    def __init__(
        self,
        api_key: str | None = None,
        chat_model: str = "gemini-1.5-flash",
        extraction_model: str = "gemini-1.5-flash",
        temperature: float = 0.7,
        max_retries: int = 1,
    ) -> None:
        """
        Initialize Gemini client configuration.

        Args:
            api_key: Google AI Studio key (falls back to GOOGLE_API_KEY env var)
            chat_model: Model identifier for chat completions
            extraction_model: Model identifier for document extraction
            temperature: Sampling temperature for chat completions
            max_retries: Attempts made by the chat client
        """
        self._api_key = api_key
        self._chat_model = chat_model
        self._extraction_model = extraction_model
        self._temperature = temperature
        self._max_retries = max_retries
        self._llm: ChatGoogleGenerativeAI | None = None
        self._genai_client: genai.Client | None = None

    @property
    def llm(self) -> ChatGoogleGenerativeAI:
        """Lazy-load chat model."""
        if self._llm is None:
            kwargs: dict[str, Any] = {
                "model": self._chat_model,
                "temperature": self._temperature,
                "max_retries": self._max_retries,
            }
            if self._api_key:
                kwargs["google_api_key"] = self._api_key
            self._llm = ChatGoogleGenerativeAI(**kwargs)
            logger.info(f"{__name__}:llm - Initialized chat model={self._chat_model}")
        return self._llm

    @property
    def genai_client(self) -> genai.Client:
        """Lazy-load google.genai client."""
        if self._genai_client is None:
            self._genai_client = genai.Client(api_key=self._api_key) if self._api_key else genai.Client()
            logger.info(f"{__name__}:genai_client - Initialized extraction client")
        return self._genai_client

    async def generate(self, prompt: str) -> str:
        """
        Complete a text prompt with the chat model.

        Args:
            prompt: Fully assembled prompt

        Returns:
            str: Model answer text
        """
        logger.debug(f"{__name__}:generate - prompt_len={len(prompt)}")
        response = await self.llm.ainvoke(prompt)
        return message_text(response.content)

    async def extract_text(self, data: bytes, mime_type: str, instruction: str) -> str:
        """
        Ask the extraction model for the text of an opaque document.

        The document travels as an inline-data part (base64 on the wire)
        followed by the instruction.

        Args:
            data: Raw file bytes
            mime_type: Content type of the file
            instruction: Extraction instruction

        Returns:
            str: Model output text, empty if the model returned nothing
        """
        logger.debug(
            f"{__name__}:extract_text - Calling Gemini",
            extra={"mime_type": mime_type, "size": len(data)},
        )
        response = await asyncio.to_thread(
            self.genai_client.models.generate_content,
            model=self._extraction_model,
            contents=[
                types.Part.from_bytes(data=data, mime_type=mime_type),
                instruction,
            ],
        )
        return response.text or ""
