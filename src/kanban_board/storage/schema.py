"""
Persisted board schema.

Records mirror the JSON written by ``encode_board``. Field types are strict:
a number where a string belongs (or null content) fails validation instead
of producing a Board that breaks later in search or rendering.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field, StrictInt, StrictStr

from ..tasks.models import DEFAULT_PREFIX, DEFAULT_TITLE, Board, Column, Task, TaskPriority


class TaskRecord(BaseModel):
    id: StrictStr
    key: StrictStr
    content: StrictStr
    priority: TaskPriority = TaskPriority.MEDIUM
    assignee: StrictStr = ""

    def to_task(self) -> Task:
        return Task(
            id=self.id,
            key=self.key,
            content=self.content,
            priority=self.priority,
            assignee=self.assignee,
        )


class ColumnRecord(BaseModel):
    id: StrictStr
    title: StrictStr
    task_ids: List[StrictStr] = Field(default_factory=list)

    def to_column(self) -> Column:
        return Column(id=self.id, title=self.title, task_ids=tuple(self.task_ids))


class BoardRecord(BaseModel):
    """Доска в сохранённом виде (version 2)."""

    prefix: StrictStr = DEFAULT_PREFIX
    title: StrictStr = DEFAULT_TITLE
    tasks: Dict[str, TaskRecord]
    columns: Dict[str, ColumnRecord]
    column_order: List[StrictStr]
    next_sequence: StrictInt

    def to_board(self) -> Board:
        return Board(
            tasks={task_id: record.to_task() for task_id, record in self.tasks.items()},
            columns={column_id: record.to_column() for column_id, record in self.columns.items()},
            column_order=tuple(self.column_order),
            next_sequence=self.next_sequence,
            prefix=self.prefix,
            title=self.title,
        )


class BoardEnvelope(BaseModel):
    version: StrictInt
    updated_at: Optional[str] = None
    board: BoardRecord
