"""HTTP API for the Plaza application."""
