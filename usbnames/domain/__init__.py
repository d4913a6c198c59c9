"""Device identity, name parsing and lookup outcome types."""
