"""
Top‑level package for the Community Events API.

This file makes ``community_events_api`` a Python package so that
modules within ``app`` can be imported using fully qualified names
like ``community_events_api.app.main``.  Tests and the launcher in
``run.py`` rely on this when they are executed from the project root.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
