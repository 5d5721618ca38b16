"""Core interfaces/abstractions.

Why:
- Defines contracts (Protocol) implemented by concrete adapters.
- Inverts dependencies: the merge pipeline depends on abstractions, not on
  the filesystem or httpx.
"""
