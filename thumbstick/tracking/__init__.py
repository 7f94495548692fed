"""Hand-tracking sources."""
