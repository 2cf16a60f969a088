"""
FastAPI board API.

JSON-интерфейс доски для веб-клиента с drag & drop.

Использование:
    from kanban_board.web import run_server

    run_server(store, port=8080)

Или через CLI:
    kanban web --port 8080
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..tasks import BoardStore, ContractViolation, Outcome, TaskPriority
from ..tasks.instructions import CreateInstruction, DeleteInstruction, MoveInstruction

logger = logging.getLogger(__name__)


class MoveRequest(BaseModel):
    source_column_id: str
    source_index: int = Field(ge=0)
    dest_column_id: str
    dest_index: int = Field(ge=0)


class CreateRequest(BaseModel):
    column_id: str
    content: str


class UpdateRequest(BaseModel):
    content: Optional[str] = None
    priority: Optional[TaskPriority] = None


def _payload(outcome: Outcome) -> Dict[str, Any]:
    body: Dict[str, Any] = {"board": outcome.board.to_dict(), "message": outcome.message}
    if outcome.task is not None:
        body["task"] = outcome.task.to_dict()
    if outcome.warning:
        body["warning"] = outcome.warning
    return body


def create_app(store: BoardStore, cors_origins: Optional[list] = None) -> FastAPI:
    """Создать FastAPI приложение поверх хранилища доски."""
    app = FastAPI(
        title=store.board.title,
        description="Kanban board API",
        version="1.0.0",
    )
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ContractViolation)
    async def contract_violation_handler(request: Request, exc: ContractViolation):
        logger.warning(f"[WEB] contract violation | path={request.url.path} error={exc}")
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})

    @app.get("/api/health")
    async def health():
        """Health check."""
        return {"status": "ok", "timestamp": datetime.now().isoformat()}

    @app.get("/api/board")
    async def get_board():
        """Вся доска."""
        return store.board.to_dict()

    @app.post("/api/board/move")
    async def move(request: MoveRequest):
        """Drop завершённого перетаскивания."""
        instruction = MoveInstruction(**request.model_dump())
        return _payload(store.dispatch(instruction))

    @app.post("/api/board/tasks", status_code=status.HTTP_201_CREATED)
    async def create(request: CreateRequest):
        """Создать задачу (inline ввод в колонке)."""
        instruction = CreateInstruction.from_commit(request.column_id, request.content)
        if instruction is None:
            return JSONResponse(
                status_code=422,
                content={"detail": "Task content must not be empty"},
            )
        return _payload(store.dispatch(instruction))

    @app.delete("/api/board/columns/{column_id}/tasks/{task_id}")
    async def delete(column_id: str, task_id: str):
        """Удалить задачу."""
        return _payload(store.dispatch(DeleteInstruction(task_id=task_id, column_id=column_id)))

    @app.patch("/api/board/tasks/{task_id}")
    async def update(task_id: str, request: UpdateRequest):
        """Изменить текст или приоритет."""
        outcome = store.update(task_id, content=request.content, priority=request.priority)
        if not outcome.ok:
            return JSONResponse(
                status_code=422,
                content={"detail": outcome.message},
            )
        return _payload(outcome)

    @app.get("/api/board/search")
    async def search(q: str = ""):
        """Поиск по доске."""
        return {"tasks": [task.to_dict() for task in store.board.search(q)]}

    return app


def run_server(store: BoardStore, host: str = "127.0.0.1", port: int = 8080) -> None:
    """Запустить uvicorn с приложением доски."""
    app = create_app(store)
    logger.info(f"[WEB] serve | host={host} port={port}")
    uvicorn.run(app, host=host, port=port, log_level="info")
