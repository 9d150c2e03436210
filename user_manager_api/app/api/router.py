"""
Top‑level router of the API.

Aggregates the endpoint routers.  Routes are mounted without a prefix
so that clients can call ``/createUser``, ``/getUsers``,
``/editUser/{id}`` and ``/deleteUser/{id}`` directly.
"""

from fastapi import APIRouter

from .endpoints import home, users

router = APIRouter()

router.include_router(home.router, tags=["home"])
router.include_router(users.router, tags=["users"])
