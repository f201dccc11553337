"""Core: settings loading and shared constants."""
