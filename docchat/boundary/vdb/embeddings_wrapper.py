"""
Gemini embeddings pinned to the vector index width.

GoogleGenerativeAIEmbeddings accepts output_dimensionality per call rather
than at construction, so this subclass applies the index dimension to every
embed_query call and checks the width of what comes back.

Dependencies: langchain_google_genai
System role: Embeddings for the S3 Vectors index
"""

import logging

from langchain_google_genai import GoogleGenerativeAIEmbeddings

logger = logging.getLogger(__name__)


class FixedDimensionEmbeddings(GoogleGenerativeAIEmbeddings):
    """Embeddings whose every vector has exactly the index dimension."""

    _dimension: int = 1536

    def __init__(
        self,
        model: str = "models/gemini-embedding-001",
        output_dimensionality: int = 1536,
        **kwargs,
    ) -> None:
        super().__init__(model=model, **kwargs)
        self._dimension = output_dimensionality
        logger.info(f"{__name__}:__init__ - model={model} dimension={output_dimensionality}")

    @property
    def dimension(self) -> int:
        return self._dimension

    def embed_query(
        self,
        text: str,
        task_type: str | None = None,
        title: str | None = None,
        output_dimensionality: int | None = None,
    ) -> list[float]:
        """
        Embed one text at the index dimension.

        Documents are stored as a single vector each, so the same call embeds
        both stored content and search queries.

        Raises:
            ValueError: If the model returns a vector of another width
        """
        vector = super().embed_query(
            text,
            task_type=task_type,
            title=title,
            output_dimensionality=self._dimension,
        )
        if len(vector) != self._dimension:
            raise ValueError(
                f"Embedding has {len(vector)} dimensions, index expects {self._dimension}"
            )
        return vector
