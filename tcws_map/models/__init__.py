"""Pydantic models: bulletin input and API payloads."""
