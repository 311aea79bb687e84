"""
Pydantic schema definitions for API payloads.

Each resource defines its own models for request and response bodies.
Schemas are separated from the database tables to decouple the API
representation (camelCase) from persistence (snake_case columns).
"""
