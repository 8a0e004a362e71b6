"""Level population services."""
