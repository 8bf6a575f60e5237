"""Services Layer — card templating and pipeline orchestration.

Invariants:
    - Services receive collaborators (renderer, settings) as arguments
"""
