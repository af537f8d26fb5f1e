"""Services Layer — imperative shell around the pure core.

Invariants:
    - Every operation: load records -> pure enforce_* -> vault transfer -> persist -> commit -> event
    - Services never decide accounting rules themselves

Design Decisions:
    - One handler class per component (registry, server, staking, delegation)
"""
