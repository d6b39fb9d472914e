"""Memory extraction and the conversation store contract."""
