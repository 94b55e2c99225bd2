"""Role and ownership rules for task mutations."""

from taskboard.model.task import Actor, Role, Task, TaskStatus, identity_id


def can_edit(actor: Actor, task: Task) -> bool:
    """Submitters may edit their own tasks while they are still pending."""
    if actor.role != Role.SUBMITTER or task.status != TaskStatus.PENDING:
        return False
    creator_id = identity_id(task.creator)
    return creator_id is not None and creator_id == identity_id(actor)


def can_delete(actor: Actor, task: Task) -> bool:
    """Same rule as editing, kept separate so the two can diverge."""
    return can_edit(actor, task)


def can_change_status(actor: Actor) -> bool:
    return actor.role == Role.APPROVER


def can_create(actor: Actor) -> bool:
    return actor.role == Role.SUBMITTER


def can_drop_into_column(actor: Actor, source: TaskStatus, target: TaskStatus) -> bool:
    """Reordering within a column is always allowed; crossing columns needs an approver."""
    if source == target:
        return True
    return can_change_status(actor)
