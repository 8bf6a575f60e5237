"""Infrastructure Layer — external service clients and cross-cutting concerns.

Invariants:
    - External calls are wrapped with timeout and error mapping, never with retries
"""
