"""API Layer — ASGI asset middleware, FastAPI routes and error handlers.

Invariants:
    - Starlette/FastAPI types never cross into core/ or services/
    - Routes registered explicitly in main.py (no auto-discovery)
"""
