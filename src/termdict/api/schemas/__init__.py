"""Pydantic response schemas for the HTTP layer."""
