"""Repositories (filesystem snapshot store)."""
