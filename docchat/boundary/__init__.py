"""Boundary adapters for remote AI services and the vector store."""
