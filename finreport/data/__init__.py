"""
Data access layer.

Design rules:
- Views call ONLY ApiClient methods (service.py).
- Every remote call is wrapped so that an unreachable server falls back to local data.
- No env var reads here (config-only).
"""
