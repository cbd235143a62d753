"""Services Layer — registration orchestration and read-model translation.

Invariants:
    - Services own the transaction boundary; repositories never commit
    - Translators are pure projections used by every query/command result
"""
