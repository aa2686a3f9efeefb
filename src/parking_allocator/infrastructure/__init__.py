"""Infrastructure layer: factories and size-class sources."""
