"""
Test suite for the Gemini client wrapper.

System role: Verification of chat and extraction calls without network access
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from docchat.boundary.llm.gemini_client import GeminiClient, message_text


class TestMessageText:
    """Test flattening of LangChain message content."""

    def test_string_content_is_returned(self):
        assert message_text("plain answer") == "plain answer"

    def test_text_blocks_are_joined(self):
        content = [
            {"type": "text", "text": "Max is "},
            "1450C",
            {"type": "image_url", "image_url": "ignored"},
        ]

        assert message_text(content) == "Max is 1450C"

    def test_none_content_is_empty(self):
        assert message_text(None) == ""


class TestGeminiClient:
    """Test SDK calls through injected doubles."""

    @pytest.mark.asyncio
    async def test_generate_returns_model_text(self):
        client = GeminiClient(api_key="test-key")
        llm = MagicMock()
        llm.ainvoke = AsyncMock(return_value=MagicMock(content="The answer"))
        client._llm = llm

        answer = await client.generate("prompt text")

        assert answer == "The answer"
        llm.ainvoke.assert_awaited_once_with("prompt text")

    @pytest.mark.asyncio
    async def test_generate_propagates_errors(self):
        client = GeminiClient(api_key="test-key")
        llm = MagicMock()
        llm.ainvoke = AsyncMock(side_effect=RuntimeError("429 quota"))
        client._llm = llm

        with pytest.raises(RuntimeError):
            await client.generate("prompt")

    @pytest.mark.asyncio
    async def test_extract_text_sends_inline_document(self):
        client = GeminiClient(api_key="test-key", extraction_model="gemini-test")
        genai_client = MagicMock()
        genai_client.models.generate_content.return_value = MagicMock(text="Extracted")
        client._genai_client = genai_client

        text = await client.extract_text(b"%PDF", "application/pdf", "Extract all text")

        assert text == "Extracted"
        kwargs = genai_client.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "gemini-test"
        part, instruction = kwargs["contents"]
        assert part.inline_data.data == b"%PDF"
        assert part.inline_data.mime_type == "application/pdf"
        assert instruction == "Extract all text"

    @pytest.mark.asyncio
    async def test_extract_text_without_output_is_empty(self):
        client = GeminiClient(api_key="test-key")
        genai_client = MagicMock()
        genai_client.models.generate_content.return_value = MagicMock(text=None)
        client._genai_client = genai_client

        assert await client.extract_text(b"data", "application/pdf", "Extract") == ""
