"""SSZ hashing, schema description and beacon claim proving."""
