"""Textual UI for taskboard."""

from taskboard.ui.app import TaskboardApp
from taskboard.ui.board import BoardScreen
from taskboard.ui.card import TaskCard
from taskboard.ui.column import TaskColumn

__all__ = [
    "BoardScreen",
    "TaskCard",
    "TaskColumn",
    "TaskboardApp",
]
