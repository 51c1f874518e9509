"""
Document text extraction.

Converts uploaded file bytes into plain text. Plain-text uploads are decoded
locally; PDF, DOC, and DOCX are sent to Gemini with an extraction instruction.

Dependencies: docchat.boundary.llm, docchat.core.exceptions
System role: First stage of document ingestion
"""

import logging

from docchat.boundary.llm.gemini_client import GeminiClient
from docchat.core.exceptions import ExtractionError, QuotaExceededError, is_quota_error
from docchat.core.prompts import EXTRACTION_INSTRUCTION

logger = logging.getLogger(__name__)

PLAIN_TEXT_MIME_TYPE = "text/plain"


def base_mime_type(content_type: str | None) -> str:
    """Media type without parameters, lowercased: "Text/Plain; charset=utf-8" -> "text/plain"."""
    return (content_type or "").split(";", 1)[0].strip().lower()


class TextExtractor:
    """Extract text from uploaded documents."""

    def __init__(self, gemini_client: GeminiClient) -> None:
        """
        Initialize extractor.

        Args:
            gemini_client: Client used for non plain-text formats
        """
        self._gemini = gemini_client

    async def extract(self, data: bytes, mime_type: str, filename: str) -> str:
        """
        Extract plain text from file bytes.

        Args:
            data: Raw file content
            mime_type: Declared content type
            filename: Original filename (for error context)

        Returns:
            str: Extracted text. Plain-text uploads are returned verbatim.

        Raises:
            QuotaExceededError: When Gemini reports rate limiting or quota exhaustion
            ExtractionError: When decoding or the Gemini call fails, or Gemini returns no text
        """
        if base_mime_type(mime_type) == PLAIN_TEXT_MIME_TYPE:
            logger.info(f"{__name__}:extract - Reading text file", extra={"document_name": filename})
            try:
                return data.decode("utf-8")
            except UnicodeDecodeError as e:
                raise ExtractionError(
                    f"Failed to extract text from {filename}: file is not valid UTF-8",
                    filename=filename,
                ) from e

        logger.info(
            f"{__name__}:extract - Using Gemini for text extraction",
            extra={"document_name": filename, "mime_type": mime_type},
        )
        try:
            text = await self._gemini.extract_text(data, mime_type, EXTRACTION_INSTRUCTION)
        except Exception as e:
            logger.error(
                f"{__name__}:extract - Gemini extraction failed: {type(e).__name__}: {e}",
                extra={"document_name": filename},
            )
            if is_quota_error(e):
                raise QuotaExceededError(
                    "API quota exceeded. Please try again later or upload PDF/TXT files "
                    "for better processing.",
                    details={"filename": filename},
                ) from e
            raise ExtractionError(
                f"Failed to extract text from {filename}: {e}",
                filename=filename,
            ) from e

        if not text or not text.strip():
            raise ExtractionError(
                f"Failed to extract text from {filename}: model returned no text",
                filename=filename,
            )
        return text
