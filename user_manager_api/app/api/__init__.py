"""
API package containing the HTTP routes.

The top‑level ``router`` in ``router.py`` includes every endpoint
module from ``endpoints``.  Routes are mounted at the application
root because clients address them as ``/createUser``, ``/getUsers``
and so on.
"""
