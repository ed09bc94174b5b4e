"""Application-layer ports and merge policy."""
