"""API bearer tokens, self-managed by their owners."""
