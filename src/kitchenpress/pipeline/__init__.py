"""Content pipeline: duplicate detection and content generation."""
