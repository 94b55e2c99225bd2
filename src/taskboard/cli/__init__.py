"""CLI argument parser and dispatch for taskboard."""

import argparse

from taskboard.cli.task import task_add, task_delete, task_list, task_status
from taskboard.model.task import STATUSES, Role

STATUS_CHOICES = [s.value for s in STATUSES]


def common_parser() -> argparse.ArgumentParser:
    """Options shared by the TUI and every subcommand."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--api-url", dest="api_url", help="Task API base URL (env TASKBOARD_API_URL)")
    common.add_argument("--token", help="Bearer token (env TASKBOARD_TOKEN)")
    common.add_argument("--user-id", dest="user_id", help="Current user id (env TASKBOARD_USER_ID)")
    common.add_argument("--user-name", dest="user_name", help="Current user display name")
    common.add_argument("--role", choices=[r.value for r in Role], help="Current user role (env TASKBOARD_ROLE)")
    common.add_argument("--json", action="store_true", help="Machine-readable JSON output")
    return common


def build_parser() -> argparse.ArgumentParser:
    """Build the full CLI argument parser."""
    common = common_parser()

    parser = argparse.ArgumentParser(
        prog="taskboard",
        description="Role-based task board",
        parents=[common],
    )

    nouns = parser.add_subparsers(dest="noun")

    # --- task ---
    task_p = nouns.add_parser("task", help="Task operations", parents=[common])
    task_verbs = task_p.add_subparsers(dest="verb")

    task_list_p = task_verbs.add_parser("list", help="List tasks", parents=[common])
    task_list_p.add_argument("--status", choices=STATUS_CHOICES, help="Only list tasks with this status")
    task_list_p.set_defaults(func=task_list)

    task_add_p = task_verbs.add_parser("add", help="Create a task", parents=[common])
    task_add_p.add_argument("title", help="Task title")
    task_add_p.add_argument("--description", default="", help="Task description")
    task_add_p.set_defaults(func=task_add)

    task_status_p = task_verbs.add_parser("status", help="Change a task's status", parents=[common])
    task_status_p.add_argument("id", help="Task ID")
    task_status_p.add_argument("status", choices=STATUS_CHOICES, help="New status")
    task_status_p.set_defaults(func=task_status)

    task_delete_p = task_verbs.add_parser("delete", help="Delete a task", parents=[common])
    task_delete_p.add_argument("id", help="Task ID")
    task_delete_p.set_defaults(func=task_delete)

    # task with no verb = list
    task_p.set_defaults(func=task_list, status=None)

    return parser
