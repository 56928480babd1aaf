"""Schemas - pydantic models at the client boundary (backend payloads, form input)."""
