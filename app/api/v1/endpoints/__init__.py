"""Versioned endpoint modules."""
