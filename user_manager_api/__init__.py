"""
Top‑level package for the User Manager API.

Makes ``user_manager_api`` importable so that modules under ``app``
can be referenced by fully qualified names like
``user_manager_api.app.main``.  All functionality lives in
submodules under ``app``.
"""

__all__ = []
