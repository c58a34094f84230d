"""Core domain: models, filters, exceptions and workspace loading."""
