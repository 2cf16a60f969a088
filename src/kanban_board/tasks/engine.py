"""
Reorder engine and mutation operations.

Every function here is pure: it takes a Board, returns a new Board and never
touches the input. Invalid ids or indices raise ContractViolation subclasses
before anything is built, so a failed call has no partial effect.

Same-column moves use the post-removal index convention: the id is first
removed at ``source_index`` and then inserted at ``dest_index`` of the
shortened sequence.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import List, Optional, Tuple

from .errors import IndexOutOfRangeError, InvariantViolation, TaskNotFoundError, ValidationError
from .models import TASK_ID_PREFIX, Board, Task, TaskPriority, avatar_url

logger = logging.getLogger(__name__)


def _check_index(column_id: str, index: int, upper: int) -> None:
    """Accept ``0 <= index <= upper``; negative indices are never wrapped."""
    if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index <= upper:
        raise IndexOutOfRangeError(column_id, index, upper)


def _require_content(content: Optional[str]) -> str:
    if content is None or not content.strip():
        raise ValidationError("Task content must not be empty")
    return content


def move_task(
    board: Board,
    source_column_id: str,
    source_index: int,
    dest_column_id: str,
    dest_index: int,
) -> Board:
    """
    Relocate one task id within or between column sequences.

    Returns the input board itself when source and destination positions
    are identical. Task data is never modified, only column membership.
    """
    source = board.column(source_column_id)
    dest = board.column(dest_column_id)
    _check_index(source.id, source_index, len(source.task_ids) - 1)

    if source.id == dest.id and source_index == dest_index:
        return board

    source_ids: List[str] = list(source.task_ids)
    task_id = source_ids.pop(source_index)

    if source.id == dest.id:
        _check_index(dest.id, dest_index, len(source_ids))
        source_ids.insert(dest_index, task_id)
        columns = {**board.columns, source.id: source.with_task_ids(source_ids)}
    else:
        dest_ids = list(dest.task_ids)
        _check_index(dest.id, dest_index, len(dest_ids))
        dest_ids.insert(dest_index, task_id)
        columns = {
            **board.columns,
            source.id: source.with_task_ids(source_ids),
            dest.id: dest.with_task_ids(dest_ids),
        }

    logger.debug(
        f"[BOARD] move | task={task_id} from={source.id}:{source_index} to={dest.id}:{dest_index}"
    )
    return replace(board, columns=columns)


def create_task(
    board: Board,
    column_id: str,
    content: str,
    priority: TaskPriority = TaskPriority.MEDIUM,
) -> Tuple[Board, Task]:
    """
    Append a new task to the end of a column.

    Args:
        board: current board
        column_id: target column
        content: task text; empty or whitespace-only text is rejected
        priority: initial priority

    Returns:
        (new board, created task)

    Raises:
        ValidationError: content is blank
        ColumnNotFoundError: unknown column
    """
    _require_content(content)
    column = board.column(column_id)

    sequence = board.next_sequence
    task_id = f"{TASK_ID_PREFIX}{sequence}"
    key = f"{board.prefix}-{sequence}"
    if task_id in board.tasks:
        raise InvariantViolation(f"next_sequence {sequence} collides with existing task '{task_id}'")

    task = Task(
        id=task_id,
        key=key,
        content=content,
        priority=TaskPriority(priority),
        assignee=avatar_url(task_id),
    )
    new_board = replace(
        board,
        tasks={**board.tasks, task_id: task},
        columns={**board.columns, column.id: column.with_task_ids(column.task_ids + (task_id,))},
        next_sequence=sequence + 1,
    )
    logger.debug(f"[BOARD] create | task={task_id} key={key} column={column.id}")
    return new_board, task


def delete_task(board: Board, task_id: str, column_id: str) -> Board:
    """
    Remove a task from its column and from the task map together.

    ``next_sequence`` is left alone so ids and keys are never reused.
    """
    column = board.column(column_id)
    if task_id not in column.task_ids or task_id not in board.tasks:
        raise TaskNotFoundError(task_id, column.id)

    tasks = {tid: task for tid, task in board.tasks.items() if tid != task_id}
    remaining = [tid for tid in column.task_ids if tid != task_id]

    logger.debug(f"[BOARD] delete | task={task_id} column={column.id}")
    return replace(
        board,
        tasks=tasks,
        columns={**board.columns, column.id: column.with_task_ids(remaining)},
    )


def update_task(
    board: Board,
    task_id: str,
    *,
    content: Optional[str] = None,
    priority: Optional[TaskPriority] = None,
) -> Board:
    """Edit content and/or priority; id, key and assignee stay as assigned."""
    task = board.task(task_id)
    changes = {}
    if content is not None:
        changes["content"] = _require_content(content)
    if priority is not None:
        changes["priority"] = TaskPriority(priority)

    updated = replace(task, **changes)
    if updated == task:
        return board
    return replace(board, tasks={**board.tasks, task_id: updated})
