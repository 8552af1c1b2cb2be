"""Bridge services."""
