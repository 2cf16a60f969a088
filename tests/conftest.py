"""
Pytest configuration and fixtures.
"""

import pytest
import tempfile
import shutil
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from kanban_board.storage import BoardRepository, MemoryBlobStore
from kanban_board.tasks.models import Board, Column, Task, TaskPriority, avatar_url


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp = tempfile.mkdtemp()
    yield Path(temp)
    shutil.rmtree(temp, ignore_errors=True)


@pytest.fixture
def kanban_home(temp_dir, monkeypatch):
    """Point config and storage at a temporary home."""
    monkeypatch.setenv("KANBAN_BOARD_HOME", str(temp_dir))
    return temp_dir


def make_board(todo=(), in_progress=(), done=(), next_sequence=None, prefix="WEB") -> Board:
    """Build a board whose tasks are named after their ids (task-N / WEB-N)."""
    ids = list(todo) + list(in_progress) + list(done)
    tasks = {
        task_id: Task(
            id=task_id,
            key=f"{prefix}-{task_id.split('-')[1]}",
            content=f"Content of {task_id}",
            priority=TaskPriority.MEDIUM,
            assignee=avatar_url(task_id),
        )
        for task_id in ids
    }
    if next_sequence is None:
        next_sequence = max((int(t.split("-")[1]) for t in ids), default=0) + 1
    return Board(
        tasks=tasks,
        columns={
            "todo": Column("todo", "To Do", tuple(todo)),
            "in-progress": Column("in-progress", "In Progress", tuple(in_progress)),
            "done": Column("done", "Done", tuple(done)),
        },
        column_order=("todo", "in-progress", "done"),
        next_sequence=next_sequence,
        prefix=prefix,
    )


@pytest.fixture
def two_task_board():
    """todo: [task-1, task-2], in-progress and done empty."""
    return make_board(todo=["task-1", "task-2"])


@pytest.fixture
def three_task_board():
    """todo: [task-1, task-2, task-3]."""
    return make_board(todo=["task-1", "task-2", "task-3"])


@pytest.fixture
def mixed_board():
    """Tasks spread over all three columns."""
    return make_board(
        todo=["task-1", "task-2", "task-3"],
        in_progress=["task-4", "task-5"],
        done=["task-6"],
        next_sequence=9,
    )


@pytest.fixture
def memory_repository():
    return BoardRepository(MemoryBlobStore())
