"""Textual command browser."""
