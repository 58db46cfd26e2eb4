"""Command-line front end for the Todo API."""
from typing import List, Optional
import argparse
import getpass
import logging
import os
import sys
from pathlib import Path

import httpx

from todo_api.client.api import DEFAULT_BASE_URL, ApiError, TodoClient
from todo_api.client.session import DEFAULT_SESSION_PATH, AuthSession
from todo_api.core.logging import configure_logging

logger = logging.getLogger(__name__)


def _format_task(task: dict) -> str:
    due = task.get("dueDate") or "-"
    line = f"[{task['id']}] {task['title']}  ({task['priority']}, {task['status']}, due {due})"
    if task.get("description"):
        line += f"\n      {task['description']}"
    return line


def _add_task_fields(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("title")
    parser.add_argument("--description")
    parser.add_argument("--priority", choices=["low", "medium", "high"])
    parser.add_argument("--status", choices=["pending", "in_progress", "completed"])
    parser.add_argument("--due", dest="due_date", help="Due date, YYYY-MM-DD")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="todo-cli", description="Manage your tasks from the terminal.")
    parser.add_argument("--url", default=os.environ.get("TODO_API_URL", DEFAULT_BASE_URL))
    parser.add_argument("--session-file", type=Path, default=DEFAULT_SESSION_PATH)
    parser.add_argument("-v", "--verbose", action="store_true")

    sub = parser.add_subparsers(dest="command", required=True)

    signup = sub.add_parser("signup", help="Create an account and log in")
    signup.add_argument("email")
    signup.add_argument("name")

    login = sub.add_parser("login", help="Log in")
    login.add_argument("email")

    sub.add_parser("logout", help="Forget the stored token")
    sub.add_parser("me", help="Show your profile")
    sub.add_parser("list", help="List your tasks")

    show = sub.add_parser("show", help="Show one task")
    show.add_argument("task_id", type=int)

    add = sub.add_parser("add", help="Create a task")
    _add_task_fields(add)

    edit = sub.add_parser("edit", help="Replace a task (omitted fields reset to defaults)")
    edit.add_argument("task_id", type=int)
    _add_task_fields(edit)

    delete = sub.add_parser("delete", help="Delete a task")
    delete.add_argument("task_id", type=int)

    return parser


def _task_fields(args: argparse.Namespace) -> dict:
    return {
        "description": args.description,
        "priority": args.priority,
        "status": args.status,
        "due_date": args.due_date,
    }


def run_command(client: TodoClient, args: argparse.Namespace, password: Optional[str] = None) -> str:
    """Execute one parsed command and return the text to print."""
    command = args.command

    if command in ("signup", "login"):
        password = password if password is not None else getpass.getpass("Password: ")
        if command == "signup":
            user = client.signup(args.email, password, args.name)
        else:
            user = client.login(args.email, password)
        return f"Logged in as {user['name']} <{user['email']}>"

    if command == "logout":
        client.logout()
        return "Logged out"

    if not client.session.is_authenticated:
        raise ApiError(401, "Not logged in. Run 'todo-cli login <email>' first.")

    if command == "me":
        user = client.current_user()
        return f"{user['name']} <{user['email']}> (id {user['id']}, since {user['createdAt']})"

    if command == "list":
        tasks = client.list_tasks()
        if not tasks:
            return "No tasks yet."
        return "\n".join(_format_task(t) for t in tasks)

    if command == "show":
        return _format_task(client.get_task(args.task_id))

    if command == "add":
        return "Created " + _format_task(client.create_task(args.title, **_task_fields(args)))

    if command == "edit":
        return "Updated " + _format_task(client.update_task(args.task_id, args.title, **_task_fields(args)))

    if command == "delete":
        client.delete_task(args.task_id)
        return f"Deleted task {args.task_id}"

    raise ValueError(f"Unknown command: {command}")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging("DEBUG" if args.verbose else "WARNING")

    session = AuthSession(args.session_file).load()
    with TodoClient(args.url, session=session) as client:
        try:
            print(run_command(client, args))
        except ApiError as e:
            print(f"Error: {e.message}", file=sys.stderr)
            return 1
        except httpx.HTTPError as e:
            logger.debug("Request to %s failed", args.url, exc_info=True)
            print(f"Error: could not reach {args.url} ({e})", file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
