"""Small shared helpers for the core layer."""
