"""Use-case layer for orchestrating page workflows.

Each module coordinates domain rules and ports without touching UI state,
preserving MVVM + Hexagonal boundaries.
"""
