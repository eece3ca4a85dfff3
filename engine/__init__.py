"""Album lookup engine: candidate scoring, resolution and query sessions."""
