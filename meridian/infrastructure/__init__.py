"""Infrastructure Layer - storage, timers and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/
    - Every scheduled callback is cancellable through the handle it returns
"""
