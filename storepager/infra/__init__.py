"""Infrastructure helpers shared across storepager."""
