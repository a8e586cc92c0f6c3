"""Shared constants, logging, errors and persisted schemas."""
