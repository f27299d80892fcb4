"""Configuration Package."""
