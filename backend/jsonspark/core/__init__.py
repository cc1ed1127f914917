"""Core Layer: domain types, validators and boundary contracts. No IO, no Firestore.

Invariants:
    - No module in core/ imports from api/ or infrastructure/
    - Validators are pure and deterministic

Design Decisions:
    - Functional core separated from imperative shell
"""
