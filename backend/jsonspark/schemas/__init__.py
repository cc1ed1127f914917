"""Pydantic Schemas: request/response validation for API endpoints.

Invariants:
    - Schemas describe the HTTP contract only; domain types live in core/
"""
