"""
Application package initializer.

The API is split into small pieces: ``core`` holds configuration,
logging, database access and error types; ``schemas`` holds the
Pydantic request/response models; ``services`` holds validation and
the store operations; ``api`` holds the routers.
"""

from .main import app  # noqa: F401
