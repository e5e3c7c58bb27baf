"""Core models, configuration and persistence for harkit."""
