"""
Vector store configuration settings.

Manages S3 Vectors configuration for document storage and retrieval.
Includes embedding model settings and content/metadata limits.

Dependencies: pydantic, pydantic_settings
System role: Vector database configuration for grounded chat retrieval
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class VectorStoreSettings(BaseSettings):
    """Vector store configuration (S3 Vectors, with in-memory fallback)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="VECTOR_STORE_",
        case_sensitive=False,
        extra="ignore",
    )

    enabled: bool = Field(
        default=True,
        description="Use the remote vector store; when false every document goes to the fallback store",
    )
    vectors_bucket: str = Field(
        default="chatbot-vectors",
        description="S3 Vectors bucket name",
    )
    index_name: str = Field(default="chatbot-documents", description="S3 Vectors index name")
    aws_region: str = Field(default="us-east-1", description="AWS region for S3 Vectors")

    embedding_model: str = Field(
        default="models/gemini-embedding-001",
        description="Google Gemini embedding model ID",
    )
    embedding_dimension: int = Field(
        default=1536,
        description="Embedding vector dimension (must match the index definition)",
    )

    max_content_length: int = Field(
        default=40000,
        description="UTF-8 bytes of document content kept in vector metadata",
    )
    top_k: int = Field(default=3, description="Number of documents retrieved per chat turn")
    list_limit: int = Field(default=100, description="Maximum records returned by session listing")
    health_max_pages: int = Field(
        default=10,
        description="list_vectors pages read to count vectors for /health; larger indexes report an approximate count",
    )
