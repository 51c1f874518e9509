"""Document-grounded chatbot backend."""
