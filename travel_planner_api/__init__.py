"""
Top-level package for the Travel Planner API.

This file makes ``travel_planner_api`` a Python package so that
modules within ``app`` can be imported using fully qualified names
like ``travel_planner_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
