"""Album metadata records, providers and merge logic."""
