"""Bundled command dictionary."""
