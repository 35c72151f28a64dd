"""Domain layer for shared content."""
