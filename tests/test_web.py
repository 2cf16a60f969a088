"""
Tests for web/app.py - FastAPI board API.

Requires: pip install fastapi httpx
"""

import pytest
from fastapi.testclient import TestClient

from kanban_board.storage import BoardRepository, MemoryBlobStore
from kanban_board.tasks.models import default_board
from kanban_board.tasks.store import BoardStore
from kanban_board.web.app import create_app


class FailingBlobStore(MemoryBlobStore):
    def set(self, key, value):
        raise OSError("quota exceeded")


@pytest.fixture
def store(memory_repository):
    return BoardStore(default_board(), memory_repository)


@pytest.fixture
def client(store):
    return TestClient(create_app(store))


class TestBoardApi:
    """Tests for the board endpoints."""

    def test_health(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_get_board(self, client):
        data = client.get("/api/board").json()

        assert data["column_order"] == ["todo", "in-progress", "done"]
        assert data["columns"]["todo"]["task_ids"] == ["task-1", "task-2"]
        assert data["next_sequence"] == 3

    def test_move(self, client, store):
        response = client.post("/api/board/move", json={
            "source_column_id": "todo",
            "source_index": 0,
            "dest_column_id": "in-progress",
            "dest_index": 0,
        })

        assert response.status_code == 200
        board = response.json()["board"]
        assert board["columns"]["todo"]["task_ids"] == ["task-2"]
        assert board["columns"]["in-progress"]["task_ids"] == ["task-1"]
        assert store.board.columns["in-progress"].task_ids == ("task-1",)

    def test_move_out_of_range(self, client, store):
        response = client.post("/api/board/move", json={
            "source_column_id": "todo",
            "source_index": 4,
            "dest_column_id": "done",
            "dest_index": 0,
        })

        assert response.status_code == 400
        assert "out of range" in response.json()["detail"]
        assert store.board == default_board()

    def test_move_negative_index(self, client):
        response = client.post("/api/board/move", json={
            "source_column_id": "todo",
            "source_index": -1,
            "dest_column_id": "done",
            "dest_index": 0,
        })

        assert response.status_code == 422

    def test_create(self, client, memory_repository):
        response = client.post("/api/board/tasks", json={"column_id": "todo", "content": "Write release notes"})

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Created item WEB-3"
        assert body["task"]["id"] == "task-3"
        assert body["board"]["next_sequence"] == 4
        assert memory_repository.load().next_sequence == 4

    def test_create_blank(self, client, store):
        response = client.post("/api/board/tasks", json={"column_id": "todo", "content": "  "})

        assert response.status_code == 422
        assert store.board.next_sequence == 3

    def test_create_unknown_column(self, client):
        response = client.post("/api/board/tasks", json={"column_id": "backlog", "content": "x"})

        assert response.status_code == 400

    def test_delete(self, client):
        response = client.delete("/api/board/columns/todo/tasks/task-1")

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Deleted WEB-1"
        assert "task-1" not in body["board"]["tasks"]

    def test_delete_wrong_column(self, client, store):
        response = client.delete("/api/board/columns/done/tasks/task-1")

        assert response.status_code == 400
        assert "task-1" in store.board.tasks

    def test_update(self, client):
        response = client.patch("/api/board/tasks/task-2", json={"priority": "High"})

        assert response.status_code == 200
        assert response.json()["board"]["tasks"]["task-2"]["priority"] == "High"

    def test_update_blank(self, client):
        response = client.patch("/api/board/tasks/task-2", json={"content": ""})

        assert response.status_code == 422

    def test_search(self, client):
        response = client.get("/api/board/search", params={"q": "kanban"})

        assert [t["key"] for t in response.json()["tasks"]] == ["WEB-1"]

    def test_save_failure_returned_as_warning(self):
        store = BoardStore(default_board(), BoardRepository(FailingBlobStore()))
        client = TestClient(create_app(store))

        response = client.post("/api/board/tasks", json={"column_id": "done", "content": "Offline"})

        assert response.status_code == 201
        assert "warning" in response.json()
        assert "task-3" in store.board.tasks
