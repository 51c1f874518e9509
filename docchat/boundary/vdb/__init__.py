"""
Vector database boundary layer.

Provides the S3 Vectors adapter used for document storage and retrieval.

Dependencies: boto3, langchain_google_genai
System role: Vector store adapter for grounded chat retrieval
"""

from docchat.boundary.vdb.vector_schemas import (
    InitResult,
    ListResult,
    SearchResult,
    StoreResult,
    VectorHealth,
    VectorListing,
    VectorMetadata,
    VectorSearchResult,
)
from docchat.boundary.vdb.vector_store_client import VectorStoreAdapter

__all__ = [
    "InitResult",
    "ListResult",
    "SearchResult",
    "StoreResult",
    "VectorHealth",
    "VectorListing",
    "VectorMetadata",
    "VectorSearchResult",
    "VectorStoreAdapter",
]
