"""Pydantic response schemas for the JSON API surface."""
