"""Message payload types and their normalization and encoding."""
