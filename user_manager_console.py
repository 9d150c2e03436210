"""Interactive console front end for the User Manager API.

The console lists users in a table, offers a form to create users and
an edit form to change them, and deletes users on request.  It talks to
the API exclusively through :class:`user_manager_client.UserManagerAPI`.

State handling follows a unidirectional data flow:

* :class:`AppState` is an immutable snapshot of everything the console
  shows: the user list, the create form, the edit form and pending
  notifications.
* :class:`Store` owns the current snapshot.  The only way to change it
  is ``store.dispatch(action)``, which runs the pure :func:`reduce`
  function and notifies subscribers.
* :class:`UsersController` performs API calls and dispatches the
  outcome.  After every successful mutation it re‑fetches the list
  with an explicit :meth:`UsersController.load_users` call; the list
  is never patched locally.
* :class:`UserConsole` renders the state and turns typed commands
  into controller calls.  Notifications are transient: they are
  printed once and then cleared.

Environment variables:

``USER_MANAGER_BASE_URL``
    Base URL of the API.  Defaults to ``http://localhost:8000``.

``LOG_LEVEL``
    Logging level of the console process.  Defaults to ``WARNING`` so
    that log output does not interleave with the interface.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, List, Optional, Tuple

from user_manager_client import UserManagerAPI


logger = logging.getLogger(__name__)

SUCCESS = "success"
ERROR = "error"

USERS_LOADED = "users_loaded"
CREATE_FIELD_CHANGED = "create_field_changed"
CREATE_FORM_CLEARED = "create_form_cleared"
EDIT_OPENED = "edit_opened"
EDIT_FIELD_CHANGED = "edit_field_changed"
EDIT_CLOSED = "edit_closed"
NOTIFIED = "notified"
NOTIFICATIONS_CLEARED = "notifications_cleared"

FORM_FIELDS = ("name", "email")


# ----------------------------------------------------------------------
# State
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class Notification:
    kind: str
    text: str


@dataclass(frozen=True)
class CreateForm:
    name: str = ""
    email: str = ""


@dataclass(frozen=True)
class EditForm:
    """Controlled fields of the edit view for user ``user_id``."""

    user_id: Any
    name: str = ""
    email: str = ""


@dataclass(frozen=True)
class AppState:
    # ``None`` until the first successful fetch.
    users: Optional[Tuple[Dict[str, Any], ...]] = None
    create_form: CreateForm = field(default_factory=CreateForm)
    edit_form: Optional[EditForm] = None
    notifications: Tuple[Notification, ...] = ()


@dataclass(frozen=True)
class Action:
    type: str
    payload: Dict[str, Any] = field(default_factory=dict)


def reduce(state: AppState, action: Action) -> AppState:
    """Return the state that results from applying ``action`` to ``state``."""
    payload = action.payload
    if action.type == USERS_LOADED:
        return replace(state, users=tuple(payload.get("users") or ()))
    if action.type == CREATE_FIELD_CHANGED:
        return replace(state, create_form=replace(state.create_form, **{payload["field"]: payload["value"]}))
    if action.type == CREATE_FORM_CLEARED:
        return replace(state, create_form=CreateForm())
    if action.type == EDIT_OPENED:
        return replace(state, edit_form=EditForm(user_id=payload["user_id"]))
    if action.type == EDIT_FIELD_CHANGED:
        if state.edit_form is None:
            return state
        return replace(state, edit_form=replace(state.edit_form, **{payload["field"]: payload["value"]}))
    if action.type == EDIT_CLOSED:
        return replace(state, edit_form=None)
    if action.type == NOTIFIED:
        notification = Notification(kind=payload["kind"], text=payload["text"])
        return replace(state, notifications=state.notifications + (notification,))
    if action.type == NOTIFICATIONS_CLEARED:
        return replace(state, notifications=())
    logger.warning("Ignoring unknown action %s", action.type)
    return state


class Store:
    """Holds the current :class:`AppState` and applies dispatched actions."""

    def __init__(self, initial: Optional[AppState] = None) -> None:
        self._state = initial or AppState()
        self._listeners: List[Callable[[AppState], None]] = []

    @property
    def state(self) -> AppState:
        return self._state

    def dispatch(self, action: Action) -> AppState:
        logger.debug("Dispatching %s", action.type)
        self._state = reduce(self._state, action)
        for listener in list(self._listeners):
            listener(self._state)
        return self._state

    def subscribe(self, listener: Callable[[AppState], None]) -> Callable[[], None]:
        """Register ``listener``; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe


# ----------------------------------------------------------------------
# Actions against the API
# ----------------------------------------------------------------------
class UsersController:
    """Turns user intents into API calls and dispatches their outcome."""

    def __init__(self, api: UserManagerAPI, store: Store) -> None:
        self.api = api
        self.store = store

    def notify(self, kind: str, text: str) -> None:
        self.store.dispatch(Action(NOTIFIED, {"kind": kind, "text": text}))

    def load_users(self) -> bool:
        """Fetch the full list and replace the one in the state."""
        users, error = self.api.list_users()
        if error:
            self.notify(ERROR, error["message"])
            return False
        self.store.dispatch(Action(USERS_LOADED, {"users": users}))
        return True

    # Create form ------------------------------------------------------
    def set_create_field(self, name: str, value: str) -> None:
        if name not in FORM_FIELDS:
            raise ValueError(f"Unknown form field: {name}")
        self.store.dispatch(Action(CREATE_FIELD_CHANGED, {"field": name, "value": value}))

    def submit_create(self) -> bool:
        form = self.store.state.create_form
        user, error = self.api.create_user(form.name, form.email)
        if error:
            self.notify(ERROR, error["message"])
            return False
        logger.info("Created user %s", (user or {}).get("id"))
        self.store.dispatch(Action(CREATE_FORM_CLEARED))
        self.notify(SUCCESS, "User created successfully")
        self.load_users()
        return True

    # Edit form --------------------------------------------------------
    def open_edit(self, user_id: Any) -> bool:
        if find_user(self.store.state, user_id) is None:
            self.notify(ERROR, "User not found")
            return False
        self.store.dispatch(Action(EDIT_OPENED, {"user_id": user_id}))
        return True

    def set_edit_field(self, name: str, value: str) -> None:
        if name not in FORM_FIELDS:
            raise ValueError(f"Unknown form field: {name}")
        self.store.dispatch(Action(EDIT_FIELD_CHANGED, {"field": name, "value": value}))

    def cancel_edit(self) -> None:
        self.store.dispatch(Action(EDIT_CLOSED))

    def submit_edit(self) -> bool:
        form = self.store.state.edit_form
        if form is None:
            return False
        if not form.name.strip() or not form.email.strip():
            self.notify(ERROR, "Please enter both name and email")
            return False
        _, error = self.api.edit_user(form.user_id, form.name, form.email)
        if error:
            self.notify(ERROR, error["message"])
            return False
        self.store.dispatch(Action(EDIT_CLOSED))
        self.notify(SUCCESS, "User edited successfully")
        self.load_users()
        return True

    # Delete -----------------------------------------------------------
    def delete_user(self, user_id: Any) -> bool:
        _, error = self.api.delete_user(user_id)
        if error:
            self.notify(ERROR, error["message"])
            return False
        self.notify(SUCCESS, "User deleted successfully")
        self.load_users()
        return True


def find_user(state: AppState, user_id: Any) -> Optional[Dict[str, Any]]:
    for user in state.users or ():
        if str(user.get("id")) == str(user_id):
            return user
    return None


# ----------------------------------------------------------------------
# Rendering
# ----------------------------------------------------------------------
def render_users(state: AppState) -> str:
    """Render the users table; an empty or missing list renders no rows."""
    rows = [(str(user.get("id", "")), str(user.get("name", "")), str(user.get("email", ""))) for user in state.users or ()]
    header = ("ID", "Name", "Email")
    widths = [max([len(header[i])] + [len(row[i]) for row in rows]) for i in range(len(header))]
    lines = ["All Users", "  ".join(title.ljust(width) for title, width in zip(header, widths))]
    lines.append("  ".join("-" * width for width in widths))
    for row in rows:
        lines.append("  ".join(value.ljust(width) for value, width in zip(row, widths)))
    return "\n".join(lines)


def render_notification(notification: Notification) -> str:
    prefix = "[OK]" if notification.kind == SUCCESS else "[ERROR]"
    return f"{prefix} {notification.text}"


HELP_TEXT = """Commands:
  list            refresh the user list
  create          fill in the create form and submit it
  edit <id>       open the edit form for a user
  delete <id>     delete a user
  help            show this help
  quit            exit"""


class UserConsole:
    """Command loop rendering :class:`AppState` as text."""

    def __init__(
        self,
        controller: UsersController,
        *,
        input_func: Callable[[str], str] = input,
        output: Callable[[str], None] = print,
    ) -> None:
        self.controller = controller
        self.store = controller.store
        self.input = input_func
        self.output = output

    def flush_notifications(self) -> None:
        """Print pending notifications once and drop them from the state."""
        notifications = self.store.state.notifications
        if not notifications:
            return
        for notification in notifications:
            self.output(render_notification(notification))
        self.store.dispatch(Action(NOTIFICATIONS_CLEARED))

    def show(self) -> None:
        self.flush_notifications()
        self.output(render_users(self.store.state))

    # Command handlers -------------------------------------------------
    def _handle_create(self) -> None:
        for name in FORM_FIELDS:
            self.controller.set_create_field(name, self.input(f"{name.capitalize()}: "))
        self.controller.submit_create()

    def _handle_edit(self, args: str) -> None:
        if not args:
            self.output("Usage: edit <id>")
            return
        if not self.controller.open_edit(args):
            return
        user = find_user(self.store.state, args) or {}
        self.output(f"Editing {user.get('name')} <{user.get('email')}>")
        for name in FORM_FIELDS:
            self.controller.set_edit_field(name, self.input(f"New {name}: "))
        if not self.controller.submit_edit():
            self.controller.cancel_edit()

    def _handle_delete(self, args: str) -> None:
        if not args:
            self.output("Usage: delete <id>")
            return
        self.controller.delete_user(args)

    def handle_command(self, line: str) -> bool:
        """Execute one command line.  Returns ``False`` when the loop should stop."""
        command, _, args = line.strip().partition(" ")
        command = command.lower()
        args = args.strip()
        if not command:
            return True
        if command in {"quit", "exit"}:
            return False
        if command == "help":
            self.output(HELP_TEXT)
            return True
        if command == "list":
            self.controller.load_users()
        elif command == "create":
            self._handle_create()
        elif command == "edit":
            self._handle_edit(args)
        elif command == "delete":
            self._handle_delete(args)
        else:
            self.output(f"Unknown command: {command}. Type 'help' for a list of commands.")
            return True
        self.show()
        return True

    def run(self) -> None:
        """Load the list, then process commands until ``quit`` or EOF."""
        self.controller.load_users()
        self.show()
        self.output(HELP_TEXT)
        try:
            while self.handle_command(self.input("> ")):
                pass
        except (EOFError, KeyboardInterrupt):
            self.output("")
        logger.info("Console stopped by user.")


def main() -> None:
    logging.basicConfig(
        level=getattr(logging, os.getenv("LOG_LEVEL", "WARNING").upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(message)s",
    )
    api = UserManagerAPI(base_url=os.getenv("USER_MANAGER_BASE_URL"))
    console = UserConsole(UsersController(api, Store()))
    console.run()


if __name__ == "__main__":
    main()
