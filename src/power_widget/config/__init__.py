"""Settings storage and button list parsing."""
