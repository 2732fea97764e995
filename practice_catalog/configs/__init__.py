"""Configuration: YAML keyword heuristics and environment-driven settings."""
