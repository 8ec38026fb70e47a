"""SVG loading, sanitizing, namespacing and serialization."""
