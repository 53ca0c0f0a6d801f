"""Pydantic models for build configuration."""
