"""HTTP transport for the translation gateway."""
