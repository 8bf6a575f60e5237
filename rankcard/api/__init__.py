"""API Layer — FastAPI routes and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Every error response is {"error": message}

Design Decisions:
    - Thin routes delegate to services
"""
