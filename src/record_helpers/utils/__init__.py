"""Shared utilities: logging bootstrap and error handling."""
