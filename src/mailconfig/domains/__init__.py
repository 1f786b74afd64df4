"""Mail domain administration."""
