"""Tests for the requests-based API client"""
import json
from unittest.mock import Mock

import pytest
import requests

from user_manager_client import DEFAULT_BASE_URL, UserManagerAPI


def make_response(status_code, payload=None, text=""):
    """Build a real requests.Response carrying ``payload`` as JSON"""
    response = requests.Response()
    response.status_code = status_code
    if payload is not None:
        response._content = json.dumps(payload).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
    else:
        response._content = text.encode("utf-8")
    response.url = "http://api.test/"
    return response


@pytest.fixture
def session():
    return Mock(spec=requests.Session)


@pytest.fixture
def api(session):
    return UserManagerAPI(base_url="http://api.test/", session=session)


class TestUserManagerAPI:
    """Test suite for UserManagerAPI"""

    def test_base_url_defaults(self, monkeypatch):
        monkeypatch.delenv("USER_MANAGER_BASE_URL", raising=False)
        assert UserManagerAPI().base_url == DEFAULT_BASE_URL

    def test_base_url_from_environment(self, monkeypatch):
        monkeypatch.setenv("USER_MANAGER_BASE_URL", "http://users.example/")
        assert UserManagerAPI().base_url == "http://users.example"

    def test_list_users(self, api, session):
        users = [{"id": 1, "name": "Alice", "email": "a@x.com"}]
        session.request.return_value = make_response(200, {"success": True, "users": users})

        result, error = api.list_users()

        assert error is None
        assert result == users
        session.request.assert_called_once_with(
            method="GET", url="http://api.test/getUsers", json=None, timeout=15
        )

    def test_create_user(self, api, session):
        user = {"id": 1, "name": "Alice", "email": "a@x.com"}
        session.request.return_value = make_response(201, {"success": True, "user": user})

        result, error = api.create_user("Alice", "a@x.com")

        assert (result, error) == (user, None)
        session.request.assert_called_once_with(
            method="POST",
            url="http://api.test/createUser",
            json={"name": "Alice", "email": "a@x.com"},
            timeout=15,
        )

    def test_create_user_failure_uses_server_message(self, api, session):
        session.request.return_value = make_response(400, {"success": False, "message": "Email already exists"})

        result, error = api.create_user("Bob", "a@x.com")

        assert result is None
        assert error == {"status_code": 400, "message": "Email already exists"}

    def test_edit_user(self, api, session):
        user = {"id": 3, "name": "Alicia", "email": "alicia@x.com"}
        session.request.return_value = make_response(200, {"success": True, "user": user})

        result, error = api.edit_user(3, "Alicia", "alicia@x.com")

        assert (result, error) == (user, None)
        assert session.request.call_args.kwargs["method"] == "PUT"
        assert session.request.call_args.kwargs["url"] == "http://api.test/editUser/3"

    def test_delete_user(self, api, session):
        session.request.return_value = make_response(200, {"success": True})

        assert api.delete_user(3) == (True, None)
        assert session.request.call_args.kwargs["url"] == "http://api.test/deleteUser/3"

    def test_delete_unknown_user(self, api, session):
        session.request.return_value = make_response(404, {"success": False, "message": "User not found"})

        ok, error = api.delete_user(3)

        assert ok is False
        assert error == {"status_code": 404, "message": "User not found"}

    def test_success_false_body_is_a_failure(self, api, session):
        session.request.return_value = make_response(200, {"success": False, "message": "nope"})

        result, error = api.list_users()

        assert result == []
        assert error == {"status_code": 200, "message": "nope"}

    def test_non_json_error_body(self, api, session):
        session.request.return_value = make_response(502, text="Bad gateway")

        _, error = api.list_users()

        assert error == {"status_code": 502, "message": "Bad gateway"}

    def test_connection_error(self, api, session):
        session.request.side_effect = requests.ConnectionError("refused")

        users, error = api.list_users()

        assert users == []
        assert error == {"status_code": None, "message": "refused"}

    def test_home(self, api, session):
        session.request.return_value = make_response(200, {"message": "hello"})

        assert api.home() == ({"message": "hello"}, None)
