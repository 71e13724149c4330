"""HTTP API for the rider dashboard."""
