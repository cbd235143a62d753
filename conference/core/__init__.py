"""Core Layer — pure registration rules, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, models/ or db/
    - All functions are pure and deterministic over the records they receive

Design Decisions:
    - Functional core separated from imperative shell (ADR: impureim sandwich)
"""
