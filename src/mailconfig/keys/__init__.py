"""DKIM signing keys for mail domains."""
