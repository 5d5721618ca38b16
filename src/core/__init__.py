"""Core: domain, contracts and the merge pipeline (no CLI, no printing)."""
