"""Domain definitions (collections, declared fields, sample content)."""
