"""JsonSpark: serve any JSON document from a stable HTTP endpoint.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
