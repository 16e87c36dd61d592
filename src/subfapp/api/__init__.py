"""HTTP API for the Subfapp application."""
