"""User management (superuser only)."""
