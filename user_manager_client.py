"""User Manager API client.

This module defines a thin client wrapper around the User Manager REST
API.  The client uses the ``requests`` library internally and exposes
one method per route:

* :meth:`home` – greeting / liveness check.
* :meth:`list_users` – fetch every user.
* :meth:`create_user` – create a user from a name and an email.
* :meth:`edit_user` – replace the name and email of a user.
* :meth:`delete_user` – delete a user.

Every method returns a tuple ``(data, error)``.  On success ``error``
is ``None``; on failure ``data`` is empty and ``error`` is a dictionary
with the keys ``status_code`` and ``message``.  ``message`` is the
server's own explanation whenever the server sent one, so that it can
be shown to the user verbatim.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000"

Error = Dict[str, Any]


class UserManagerAPI:
    """Client for interacting with the User Manager API."""

    def __init__(
        self,
        *,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL for the API, e.g. ``https://example.com``.
                Defaults to the ``USER_MANAGER_BASE_URL`` environment
                variable, then to ``http://localhost:8000``.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Per‑request timeout in seconds.
        """
        base_url = base_url or os.getenv("USER_MANAGER_BASE_URL") or DEFAULT_BASE_URL
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helper
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Path relative to :attr:`base_url` (e.g. ``/getUsers``).
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)`` as described in the module
            docstring.  A response whose body says ``"success": false``
            is treated as a failure even if its status code is 2xx.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json() if response.content else None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("message") or err_json.get("detail") or str(err_json)
                except (ValueError, AttributeError):
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.JSONDecodeError as exc:
            logger.error("API returned invalid JSON: %s", exc)
            return None, {"status_code": response.status_code, "message": "Invalid response from server"}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}
        if isinstance(data, dict) and data.get("success") is False:
            message = data.get("message") or "Request failed"
            logger.error("API request failed (%s): %s", response.status_code, message)
            return None, {"status_code": response.status_code, "message": message}
        return data, None

    # ------------------------------------------------------------------
    # User operations
    # ------------------------------------------------------------------
    def home(self) -> Tuple[Optional[Any], Optional[Error]]:
        """Call the greeting endpoint."""
        return self._request("GET", "/")

    def list_users(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """Retrieve all users.

        Returns:
            A tuple ``(users, error)``.  ``users`` is empty on failure.
        """
        data, error = self._request("GET", "/getUsers")
        if error:
            return [], error
        if isinstance(data, dict) and isinstance(data.get("users"), list):
            return data["users"], None
        return [], None

    def create_user(self, name: str, email: str) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Create a user.

        Returns:
            A tuple ``(user, error)``.
        """
        data, error = self._request("POST", "/createUser", json_body={"name": name, "email": email})
        if error:
            return None, error
        return (data or {}).get("user"), None

    def edit_user(
        self, user_id: Any, name: str, email: str
    ) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Replace the name and email of a user.

        Returns:
            A tuple ``(user, error)``.
        """
        data, error = self._request(
            "PUT", f"/editUser/{user_id}", json_body={"name": name, "email": email}
        )
        if error:
            return None, error
        return (data or {}).get("user"), None

    def delete_user(self, user_id: Any) -> Tuple[bool, Optional[Error]]:
        """Delete a user.

        Returns:
            A tuple ``(success, error)``.
        """
        data, error = self._request("DELETE", f"/deleteUser/{user_id}")
        if error:
            return False, error
        return bool((data or {}).get("success", True)), None
