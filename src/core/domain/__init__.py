"""Domain models and entities.

Why:
- Pure, strict data structures (Pydantic v2) live here.
- The domain knows nothing about pypdf, HTTP or the CLI: only merge concepts.
"""
