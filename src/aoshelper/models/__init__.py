"""Pydantic models for command dictionary records."""
