"""Core infrastructure: strict models, errors, settings and logging."""
