"""
Tests for tasks/models.py - board data model and invariants.
"""

import pytest
from dataclasses import replace

from kanban_board.tasks.errors import ColumnNotFoundError, InvariantViolation, TaskNotFoundError
from kanban_board.tasks.models import (
    Board,
    Column,
    Task,
    TaskPriority,
    avatar_url,
    default_board,
    numeric_suffix,
    validate_board,
)

from conftest import make_board


class TestTaskModel:
    """Tests for Task and Column values."""

    def test_task_to_dict(self):
        """Test converting task to dictionary."""
        task = Task(id="task-7", key="WEB-7", content="Ship it", priority=TaskPriority.HIGH, assignee="a.svg")
        data = task.to_dict()

        assert data == {
            "id": "task-7",
            "key": "WEB-7",
            "content": "Ship it",
            "priority": "High",
            "assignee": "a.svg",
        }

    def test_task_from_dict_defaults(self):
        """Missing priority falls back to Medium."""
        task = Task.from_dict({"id": "task-1", "key": "WEB-1", "content": "x"})

        assert task.priority == TaskPriority.MEDIUM
        assert task.assignee == ""

    def test_task_is_immutable(self):
        task = Task(id="task-1", key="WEB-1", content="x")

        with pytest.raises(AttributeError):
            task.key = "WEB-99"

    def test_task_str(self):
        task = Task(id="task-1", key="WEB-1", content="Write docs")

        assert "WEB-1" in str(task)
        assert "Write docs" in str(task)

    def test_column_with_task_ids_returns_copy(self):
        column = Column("todo", "To Do", ("task-1",))
        updated = column.with_task_ids(["task-1", "task-2"])

        assert column.task_ids == ("task-1",)
        assert updated.task_ids == ("task-1", "task-2")

    def test_avatar_url_is_deterministic(self):
        assert avatar_url("task-3") == avatar_url("task-3")
        assert avatar_url("task-3").endswith("seed=task-3")

    def test_numeric_suffix(self):
        assert numeric_suffix("task-12") == 12
        assert numeric_suffix("WEB-3") == 3
        assert numeric_suffix("no-number") is None


class TestBoardQueries:
    """Tests for read-only board helpers."""

    def test_iter_columns_follows_order(self, mixed_board):
        assert [c.id for c in mixed_board.iter_columns()] == ["todo", "in-progress", "done"]

    def test_column_tasks_in_display_order(self, mixed_board):
        tasks = mixed_board.column_tasks("in-progress")

        assert [t.id for t in tasks] == ["task-4", "task-5"]

    def test_unknown_column(self, mixed_board):
        with pytest.raises(ColumnNotFoundError):
            mixed_board.column("backlog")

    def test_unknown_task(self, mixed_board):
        with pytest.raises(TaskNotFoundError):
            mixed_board.task("task-99")

    def test_find_column(self, mixed_board):
        assert mixed_board.find_column("task-5") == "in-progress"
        assert mixed_board.find_column("task-99") is None

    def test_search_by_content_and_key(self):
        board = default_board()

        assert [t.id for t in board.search("kanban")] == ["task-1"]
        assert [t.id for t in board.search("web-2")] == ["task-2"]
        assert board.search("nothing like this") == []

    def test_assignees(self, two_task_board):
        assert two_task_board.assignees() == [avatar_url("task-1"), avatar_url("task-2")]

    def test_task_count(self, mixed_board):
        assert mixed_board.task_count == 6


class TestBoardSerialization:
    """Tests for Board.to_dict / Board.from_dict."""

    def test_round_trip(self, mixed_board):
        restored = Board.from_dict(mixed_board.to_dict())

        assert restored == mixed_board

    def test_column_order_serialized_as_list(self, mixed_board):
        data = mixed_board.to_dict()

        assert data["column_order"] == ["todo", "in-progress", "done"]
        assert data["columns"]["todo"]["task_ids"] == ["task-1", "task-2", "task-3"]
        assert data["next_sequence"] == 9


class TestValidateBoard:
    """Tests for board invariants."""

    def test_default_board_is_valid(self):
        board = default_board()

        assert validate_board(board) is board
        assert board.next_sequence == 3
        assert board.columns["todo"].task_ids == ("task-1", "task-2")
        assert board.tasks["task-1"].key == "WEB-1"

    def test_default_board_with_prefix(self):
        board = default_board("OPS")

        assert board.tasks["task-2"].key == "OPS-2"
        assert board.title == "OPS Board"

    def test_column_order_mismatch(self, two_task_board):
        board = replace(two_task_board, column_order=("todo", "done"))

        with pytest.raises(InvariantViolation):
            validate_board(board)

    def test_duplicate_column_order(self, two_task_board):
        board = replace(two_task_board, column_order=("todo", "todo", "in-progress", "done"))

        with pytest.raises(InvariantViolation):
            validate_board(board)

    def test_unknown_task_reference(self, two_task_board):
        columns = {**two_task_board.columns, "done": Column("done", "Done", ("task-9",))}
        board = replace(two_task_board, columns=columns, next_sequence=10)

        with pytest.raises(InvariantViolation, match="unknown task"):
            validate_board(board)

    def test_task_in_two_columns(self, two_task_board):
        columns = {**two_task_board.columns, "done": Column("done", "Done", ("task-1",))}
        board = replace(two_task_board, columns=columns)

        with pytest.raises(InvariantViolation, match="both"):
            validate_board(board)

    def test_orphan_task(self, two_task_board):
        columns = {**two_task_board.columns, "todo": Column("todo", "To Do", ("task-1",))}
        board = replace(two_task_board, columns=columns)

        with pytest.raises(InvariantViolation, match="not placed"):
            validate_board(board)

    def test_next_sequence_must_exceed_suffixes(self):
        board = make_board(todo=["task-1", "task-2"], next_sequence=2)

        with pytest.raises(InvariantViolation, match="next_sequence"):
            validate_board(board)

    def test_duplicate_keys(self, two_task_board):
        tasks = dict(two_task_board.tasks)
        tasks["task-2"] = replace(tasks["task-2"], key="WEB-1")
        board = replace(two_task_board, tasks=tasks)

        with pytest.raises(InvariantViolation, match="keys"):
            validate_board(board)

    def test_map_key_must_match_id(self, two_task_board):
        tasks = dict(two_task_board.tasks)
        tasks["task-2"] = replace(tasks["task-2"], id="task-5")
        board = replace(two_task_board, tasks=tasks, next_sequence=6)

        with pytest.raises(InvariantViolation):
            validate_board(board)
