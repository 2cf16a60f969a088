"""
Task models for Kanban board.

Board - неизменяемое значение: задачи, колонки, порядок колонок и счётчик
последовательности. Операции никогда не меняют Board на месте, а возвращают
новое значение (см. engine.py).
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from .errors import ColumnNotFoundError, InvariantViolation, TaskNotFoundError

AVATAR_URL = "https://api.dicebear.com/7.x/avataaars/svg?seed={seed}"
TASK_ID_PREFIX = "task-"

DEFAULT_PREFIX = "WEB"
DEFAULT_TITLE = "WEB Board"

_NUMERIC_SUFFIX = re.compile(r"(\d+)$")


class TaskPriority(str, Enum):
    """Приоритет задачи."""
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


def avatar_url(seed: str) -> str:
    """Placeholder avatar locator, reproducible for the same seed."""
    return AVATAR_URL.format(seed=seed)


def numeric_suffix(value: str) -> Optional[int]:
    match = _NUMERIC_SUFFIX.search(value)
    return int(match.group(1)) if match else None


@dataclass(frozen=True)
class Task:
    """Задача на доске."""
    id: str
    key: str
    content: str
    priority: TaskPriority = TaskPriority.MEDIUM
    assignee: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "key": self.key,
            "content": self.content,
            "priority": self.priority.value,
            "assignee": self.assignee,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Task:
        return cls(
            id=data["id"],
            key=data["key"],
            content=data["content"],
            priority=TaskPriority(data.get("priority", TaskPriority.MEDIUM.value)),
            assignee=data.get("assignee", ""),
        )

    def __str__(self) -> str:
        return f"[{self.key}] {self.content} ({self.priority.value})"


@dataclass(frozen=True)
class Column:
    """Колонка: упорядоченный список ссылок на задачи."""
    id: str
    title: str
    task_ids: Tuple[str, ...] = ()

    def with_task_ids(self, task_ids: Iterable[str]) -> Column:
        return replace(self, task_ids=tuple(task_ids))

    def to_dict(self) -> dict:
        return {"id": self.id, "title": self.title, "task_ids": list(self.task_ids)}

    @classmethod
    def from_dict(cls, data: dict) -> Column:
        return cls(id=data["id"], title=data["title"], task_ids=tuple(data.get("task_ids", [])))


@dataclass(frozen=True)
class Board:
    """
    Вся доска целиком: единица изменения и сохранения.

    The maps are never mutated after construction; engine functions build
    fresh dicts and return a new Board.
    """
    tasks: Dict[str, Task]
    columns: Dict[str, Column]
    column_order: Tuple[str, ...]
    next_sequence: int
    prefix: str = DEFAULT_PREFIX
    title: str = DEFAULT_TITLE

    @property
    def task_count(self) -> int:
        return len(self.tasks)

    def column(self, column_id: str) -> Column:
        try:
            return self.columns[column_id]
        except KeyError:
            raise ColumnNotFoundError(column_id) from None

    def task(self, task_id: str) -> Task:
        try:
            return self.tasks[task_id]
        except KeyError:
            raise TaskNotFoundError(task_id) from None

    def iter_columns(self) -> Iterator[Column]:
        """Columns in left-to-right order."""
        for column_id in self.column_order:
            yield self.columns[column_id]

    def column_tasks(self, column_id: str) -> List[Task]:
        """Tasks of a column in display order."""
        return [self.tasks[task_id] for task_id in self.column(column_id).task_ids]

    def find_column(self, task_id: str) -> Optional[str]:
        for column in self.iter_columns():
            if task_id in column.task_ids:
                return column.id
        return None

    def assignees(self) -> List[str]:
        return [task.assignee for task in self.tasks.values()]

    def search(self, query: str) -> List[Task]:
        """Поиск задач по тексту или ключу."""
        query_lower = query.strip().lower()
        found = []
        for column in self.iter_columns():
            for task_id in column.task_ids:
                task = self.tasks[task_id]
                if query_lower in task.content.lower() or query_lower in task.key.lower():
                    found.append(task)
        return found

    def to_dict(self) -> Dict[str, Any]:
        return {
            "prefix": self.prefix,
            "title": self.title,
            "tasks": {task_id: task.to_dict() for task_id, task in self.tasks.items()},
            "columns": {column_id: column.to_dict() for column_id, column in self.columns.items()},
            "column_order": list(self.column_order),
            "next_sequence": self.next_sequence,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Board:
        return cls(
            tasks={task_id: Task.from_dict(raw) for task_id, raw in data["tasks"].items()},
            columns={column_id: Column.from_dict(raw) for column_id, raw in data["columns"].items()},
            column_order=tuple(data["column_order"]),
            next_sequence=int(data["next_sequence"]),
            prefix=data.get("prefix", DEFAULT_PREFIX),
            title=data.get("title", DEFAULT_TITLE),
        )


def validate_board(board: Board) -> Board:
    """
    Check that tasks and columns agree with each other.

    Returns the board unchanged so the call can be chained; raises
    InvariantViolation describing the first problem found.
    """
    if len(set(board.column_order)) != len(board.column_order):
        raise InvariantViolation(f"Duplicate ids in column order: {list(board.column_order)}")
    if set(board.column_order) != set(board.columns):
        raise InvariantViolation(
            f"Column order {sorted(board.column_order)} does not match columns {sorted(board.columns)}"
        )

    for column_id, column in board.columns.items():
        if column.id != column_id:
            raise InvariantViolation(f"Column stored under '{column_id}' has id '{column.id}'")
    for task_id, task in board.tasks.items():
        if task.id != task_id:
            raise InvariantViolation(f"Task stored under '{task_id}' has id '{task.id}'")

    owner: Dict[str, str] = {}
    for column in board.iter_columns():
        for task_id in column.task_ids:
            if task_id not in board.tasks:
                raise InvariantViolation(f"Column '{column.id}' references unknown task '{task_id}'")
            if task_id in owner:
                raise InvariantViolation(
                    f"Task '{task_id}' appears in both '{owner[task_id]}' and '{column.id}'"
                )
            owner[task_id] = column.id

    orphans = set(board.tasks) - set(owner)
    if orphans:
        raise InvariantViolation(f"Tasks not placed in any column: {sorted(orphans)}")

    keys = [task.key for task in board.tasks.values()]
    if len(set(keys)) != len(keys):
        raise InvariantViolation("Task keys are not unique")

    for task in board.tasks.values():
        for value in (task.id, task.key):
            suffix = numeric_suffix(value)
            if suffix is not None and suffix >= board.next_sequence:
                raise InvariantViolation(
                    f"next_sequence {board.next_sequence} is not above '{value}'"
                )
    return board


def default_board(prefix: str = DEFAULT_PREFIX, title: Optional[str] = None) -> Board:
    """Built-in board used when nothing valid has been persisted yet."""
    tasks = {
        "task-1": Task(
            id="task-1",
            key=f"{prefix}-1",
            content="Design the kanban layout",
            priority=TaskPriority.HIGH,
            assignee=avatar_url("Felix"),
        ),
        "task-2": Task(
            id="task-2",
            key=f"{prefix}-2",
            content="Install the UI component library",
            priority=TaskPriority.MEDIUM,
            assignee=avatar_url("Aneka"),
        ),
    }
    columns = {
        "todo": Column(id="todo", title="To Do", task_ids=("task-1", "task-2")),
        "in-progress": Column(id="in-progress", title="In Progress"),
        "done": Column(id="done", title="Done"),
    }
    return Board(
        tasks=tasks,
        columns=columns,
        column_order=("todo", "in-progress", "done"),
        next_sequence=3,
        prefix=prefix,
        title=title or f"{prefix} Board",
    )
