"""Services that orchestrate adapters around the domain.

Why:
- The merge flow and outline planning live here so any entry-point (CLI,
  tests, scripts) runs the same logic.
"""
