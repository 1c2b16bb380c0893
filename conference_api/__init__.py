"""
Top‑level package for the Conference API.

This file makes ``conference_api`` a Python package so that modules
within ``app`` can be imported using fully qualified names like
``conference_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
