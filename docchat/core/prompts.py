"""
Chat prompt templates.

Grounded and general-knowledge prompts for the chat model, plus the
instruction used for document text extraction.

Dependencies: langchain_core.prompts
System role: Prompt assembly for grounded chat
"""

from langchain_core.prompts import PromptTemplate

from docchat.models.chat import RetrievedDocument

EXCERPT_LENGTH = 2000

EXTRACTION_INSTRUCTION = """Extract all text content from this document.
Provide a clean, readable version of the text without any formatting artifacts.
Return only the extracted text content."""

GROUNDED_PROMPT = PromptTemplate.from_template(
    """Based on the uploaded documents:

{context}
User question: {question}

Please provide a comprehensive, well-formatted answer based primarily on the information from the uploaded documents. Format your response with:
- Use **bold** for important terms and headings
- Use bullet points (-) for lists
- Use numbered lists (1., 2., 3.) for sequential steps
- Separate paragraphs with line breaks
- If the documents don't contain enough information, supplement with general knowledge while clearly indicating what comes from documents vs. general knowledge

Make your response clear, organized, and easy to read."""
)

GENERAL_PROMPT = PromptTemplate.from_template(
    """You are a helpful AI assistant. The user has asked: "{question}"

Since no relevant documents have been uploaded for this question, please provide a helpful and informative response based on your general knowledge.

Format your response with:
- Use **bold** for important terms and headings
- Use bullet points (-) for lists
- Use numbered lists (1., 2., 3.) for sequential steps
- Separate paragraphs with line breaks
- Make it clear, organized, and easy to read

If this question would benefit from specific documentation or context, you can suggest that the user upload relevant documents for more targeted assistance."""
)


def format_context(documents: list[RetrievedDocument]) -> str:
    """
    Render retrieved documents as the grounding section.

    Each document contributes its filename and the first EXCERPT_LENGTH
    characters of its content.

    Args:
        documents: Retrieved documents, best match first

    Returns:
        str: Grounding section text
    """
    blocks = []
    for index, doc in enumerate(documents, start=1):
        filename = doc.filename or f"Document {index}"
        blocks.append(f"Document: {filename}\n{doc.content[:EXCERPT_LENGTH]}...\n")
    return "\n".join(blocks)


def build_chat_prompt(question: str, documents: list[RetrievedDocument]) -> str:
    """
    Assemble the prompt for one chat turn.

    Args:
        question: User message
        documents: Retrieved grounding documents (may be empty)

    Returns:
        str: Grounded prompt when documents exist, otherwise general prompt
    """
    if documents:
        return GROUNDED_PROMPT.format(context=format_context(documents), question=question)
    return GENERAL_PROMPT.format(question=question)


def degraded_response(documents_found: int) -> str:
    """Canned answer returned when the chat model reports quota exhaustion."""
    if documents_found:
        return (
            f"I found {documents_found} relevant document(s) for your question, but I'm "
            "currently unable to process them due to API quota limits. Please try again "
            "later, or contact support for assistance."
        )
    return (
        "I'm currently unable to process your request due to API quota limits. Please "
        "try again later. In the meantime, you can upload PDF or text documents for "
        "better processing efficiency."
    )
