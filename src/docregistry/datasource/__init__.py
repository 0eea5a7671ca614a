"""Storage primitives backing the document store."""
