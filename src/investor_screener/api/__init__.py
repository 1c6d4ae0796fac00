"""HTTP service for investor screening."""
