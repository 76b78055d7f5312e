"""Framework adapters for pagepurge."""
