"""Text output for histogram counts."""
