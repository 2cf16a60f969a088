"""Kanban board core: models, reorder engine, mutations and the board store."""

from .engine import create_task, delete_task, move_task, update_task
from .errors import (
    BoardError,
    ColumnNotFoundError,
    ContractViolation,
    IndexOutOfRangeError,
    InvariantViolation,
    PersistenceError,
    SchemaError,
    TaskNotFoundError,
    ValidationError,
)
from .instructions import CreateInstruction, DeleteInstruction, MoveInstruction
from .kanban import print_board, print_task_detail
from .models import Board, Column, Task, TaskPriority, avatar_url, default_board, validate_board
from .store import BoardStore, Outcome

__all__ = [
    "Board",
    "Column",
    "Task",
    "TaskPriority",
    "avatar_url",
    "default_board",
    "validate_board",
    "move_task",
    "create_task",
    "delete_task",
    "update_task",
    "MoveInstruction",
    "CreateInstruction",
    "DeleteInstruction",
    "BoardStore",
    "Outcome",
    "print_board",
    "print_task_detail",
    "BoardError",
    "ValidationError",
    "ContractViolation",
    "ColumnNotFoundError",
    "TaskNotFoundError",
    "IndexOutOfRangeError",
    "InvariantViolation",
    "PersistenceError",
    "SchemaError",
]
