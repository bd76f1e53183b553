"""Convert to Blocks settings service."""
