"""HTTP routing for the Asset Host API."""
