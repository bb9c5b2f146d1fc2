"""
Pydantic schema definitions for API payloads.

Schemas are separated from the SQLite rows held by the store to
decouple the API representation from persistence.
"""
