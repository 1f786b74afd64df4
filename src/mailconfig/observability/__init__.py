"""Logging, request correlation, metrics and health checks."""
