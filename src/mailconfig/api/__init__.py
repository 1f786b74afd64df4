"""Unauthenticated API endpoints."""
