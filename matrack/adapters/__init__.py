"""Adapter package for external I/O implementations.

Purpose:
    Concrete implementations of the domain ports: the asset API over HTTP
    and the per-browser credential store.

Dependencies:
    ``httpx`` for transport; domain protocol definitions.

Call context:
    Imported by ``matrack.web_ui.runtime`` for wiring and by tests for
    transport-level behavior verification.
"""
