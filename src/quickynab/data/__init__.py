"""Bundled dialect snapshot."""
