"""Configuration and error definitions."""
