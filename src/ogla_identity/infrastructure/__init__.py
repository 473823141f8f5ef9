"""Identity infrastructure: persistence and email adapters."""
