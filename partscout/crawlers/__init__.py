"""Crawler modules (site adapters, shared HTTP client/browser, extraction)."""
