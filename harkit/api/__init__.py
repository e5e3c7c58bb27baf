"""HTTP API for harkit."""
