"""Core Layer — pure domain logic, no IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Randomness and time are injected so every function is deterministic under test

Design Decisions:
    - Functional core separated from imperative shell: services read state,
      call the pure planners/state machines here, then perform the writes
"""
