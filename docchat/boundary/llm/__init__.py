"""
Gemini boundary layer.

Dependencies: langchain_google_genai, google.genai
System role: Generative model adapter
"""

from docchat.boundary.llm.gemini_client import GeminiClient

__all__ = ["GeminiClient"]
