"""Core: config, logging, exceptions, catalog, context."""
