"""Admin settings pages and the registry they are recorded in."""
