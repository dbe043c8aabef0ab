"""API Layer — FastAPI routes and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All JSON endpoints return structured responses; errors use the CowChatError envelope

Design Decisions:
    - Thin routes delegate to services
"""
