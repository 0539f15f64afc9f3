"""Result types for batch lookups."""
