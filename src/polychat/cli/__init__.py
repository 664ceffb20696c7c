"""`polychat` command-line interface (requires the cli extra)."""
