"""Handlers for 'taskboard task' commands."""

import asyncio

from taskboard.cli._common import (
    actor_or_die,
    error,
    format_task_line,
    load_settings,
    open_client,
    output_json,
    output_result,
    task_to_dict,
)
from taskboard.errors import TaskError
from taskboard.model.columns import partition
from taskboard.model.permissions import can_change_status, can_create, can_delete
from taskboard.model.task import TaskDraft, parse_status


def task_list(args) -> int:
    """List tasks grouped by status column."""
    settings = load_settings(args)

    async def run():
        async with open_client(settings) as client:
            return await client.list_tasks(args.status)

    try:
        tasks = asyncio.run(run())
    except TaskError as e:
        error(e.message, args.json)

    if args.json:
        output_json([task_to_dict(t) for t in tasks])
        return 0

    for status, column in partition(tasks):
        if args.status and status != args.status:
            continue
        print(f"{status.value.capitalize()} ({len(column)})")
        for task in column:
            print(format_task_line(task, indent="  "))
    return 0


def task_add(args) -> int:
    """Create a task (submitters only)."""
    settings = load_settings(args)
    actor = actor_or_die(settings, args.json)
    if not can_create(actor):
        error("Only submitters can create tasks", args.json)
    draft = TaskDraft(title=args.title, description=args.description or None)

    async def run():
        async with open_client(settings) as client:
            return await client.create_task(draft)

    try:
        task = asyncio.run(run())
    except TaskError as e:
        error(e.message, args.json)

    output_result(task_to_dict(task), f"Created task {task.id}: {task.title}", args.json)
    return 0


def task_status(args) -> int:
    """Move a task to another status (approvers only)."""
    settings = load_settings(args)
    actor = actor_or_die(settings, args.json)
    if not can_change_status(actor):
        error("Only approvers can change task status", args.json)

    async def run():
        async with open_client(settings) as client:
            return await client.update_task(args.id, {"status": parse_status(args.status).value})

    try:
        task = asyncio.run(run())
    except TaskError as e:
        error(e.message, args.json)

    output_result(task_to_dict(task), f"Task {task.id} is now {task.status.value}", args.json)
    return 0


def task_delete(args) -> int:
    """Delete a task the actor owns while it is still pending."""
    settings = load_settings(args)
    actor = actor_or_die(settings, args.json)

    async def run():
        async with open_client(settings) as client:
            task = await client.get_task(args.id)
            if not can_delete(actor, task):
                return None
            return await client.delete_task(task.id)

    try:
        result = asyncio.run(run())
    except TaskError as e:
        error(e.message, args.json)

    if result is None:
        error("Only the creator can delete a pending task", args.json)
    output_result({"id": args.id, **result}, result["message"], args.json)
    return 0
