"""Identity resolution, credential encoding and access policy."""
