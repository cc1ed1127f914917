"""Infrastructure Layer: Firestore gateway and cross-cutting HTTP concerns.

Invariants:
    - Firestore/google-api-core exceptions never escape this layer unmapped
    - Middleware is pure ASGI and independent of route logic
"""
