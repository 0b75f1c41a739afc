"""Core services: configuration, logging setup, and the template registry."""
