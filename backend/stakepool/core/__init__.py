"""Core Layer — pure accounting logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic
    - Every check raises before any state is produced

Design Decisions:
    - Functional core separated from imperative shell: the shell loads records,
      core validates and returns new frozen records, the shell persists them
"""
