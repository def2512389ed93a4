"""Schema versioning and report migration services."""
