"""Request/response schemas and domain records."""
