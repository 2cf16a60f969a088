from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from .config import AppConfig, config_path, load_config, save_config
from .logging_config import configure_logging
from .session import open_store
from .tasks import (
    BoardStore,
    ContractViolation,
    Outcome,
    TaskPriority,
    default_board,
    print_board,
    print_task_detail,
)
from .tasks.kanban import print_outcome

app = typer.Typer(no_args_is_help=True, help="Kanban board in the terminal.")

console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Подробный лог"),
) -> None:
    """Kanban доска: колонки, задачи, перетаскивание."""
    cfg = load_config()
    configure_logging("DEBUG" if verbose else cfg.log_level)


def _store() -> BoardStore:
    return open_store(load_config())


def _report(outcome: Outcome) -> None:
    print_outcome(outcome, console)
    if not outcome.ok:
        raise typer.Exit(1)


def _contract_error(e: ContractViolation) -> typer.Exit:
    console.print(f"[red]{e}[/red]")
    return typer.Exit(2)


def _parse_priority(value: str) -> TaskPriority:
    for priority in TaskPriority:
        if priority.value.lower() == value.strip().lower():
            return priority
    console.print(f"[red]Invalid priority: {value}[/red]")
    raise typer.Exit(1)


# ==============================================================================
# Board Commands
# ==============================================================================

@app.command("board")
def board_cmd(
    search: str = typer.Option("", "--search", "-s", help="Показать только задачи с текстом"),
) -> None:
    """Показать Kanban доску."""
    store = _store()
    if not search:
        print_board(store.board, console)
        return

    table = Table(title=f"Search: {search}")
    table.add_column("Key", style="bold")
    table.add_column("Column")
    table.add_column("Priority")
    table.add_column("Content")
    for task in store.board.search(search):
        column_id = store.board.find_column(task.id)
        table.add_row(task.key, store.board.columns[column_id].title, task.priority.value, task.content)
    console.print(table)


@app.command("task-create")
def task_create_cmd(
    column_id: str = typer.Argument(..., help="ID колонки (todo/in-progress/done)"),
    content: str = typer.Argument(..., help="Текст задачи"),
    priority: str = typer.Option("Medium", "--priority", "-p", help="Приоритет: High/Medium/Low"),
) -> None:
    """Создать задачу в конце колонки."""
    prio = _parse_priority(priority)
    store = _store()
    try:
        _report(store.create(column_id, content, prio))
    except ContractViolation as e:
        raise _contract_error(e)


@app.command("task-move")
def task_move_cmd(
    source_column_id: str = typer.Argument(..., help="Колонка-источник"),
    source_index: int = typer.Argument(..., help="Позиция в источнике (с 0)"),
    dest_column_id: str = typer.Argument(..., help="Колонка-приёмник"),
    dest_index: int = typer.Argument(..., help="Позиция в приёмнике после удаления из источника"),
) -> None:
    """Переместить задачу."""
    store = _store()
    try:
        outcome = store.move(source_column_id, source_index, dest_column_id, dest_index)
    except ContractViolation as e:
        raise _contract_error(e)

    if not outcome.changed:
        console.print("[dim]Nothing to move[/dim]")
        return
    _report(outcome)
    print_board(outcome.board, console)


@app.command("task-delete")
def task_delete_cmd(
    task_id: str = typer.Argument(..., help="ID задачи (task-N)"),
    column_id: Optional[str] = typer.Option(None, "--column", "-c", help="Колонка (по умолчанию ищется)"),
) -> None:
    """Удалить задачу."""
    store = _store()
    column_id = column_id or store.board.find_column(task_id)
    if column_id is None:
        console.print(f"[red]Task not found: {task_id}[/red]")
        raise typer.Exit(2)
    try:
        _report(store.delete(task_id, column_id))
    except ContractViolation as e:
        raise _contract_error(e)


@app.command("task-edit")
def task_edit_cmd(
    task_id: str = typer.Argument(..., help="ID задачи (task-N)"),
    content: Optional[str] = typer.Option(None, "--content", help="Новый текст"),
    priority: Optional[str] = typer.Option(None, "--priority", "-p", help="High/Medium/Low"),
) -> None:
    """Изменить текст или приоритет задачи."""
    prio = _parse_priority(priority) if priority else None
    store = _store()
    try:
        _report(store.update(task_id, content=content, priority=prio))
    except ContractViolation as e:
        raise _contract_error(e)


@app.command("task-show")
def task_show_cmd(
    task_id: str = typer.Argument(..., help="ID задачи (task-N)"),
) -> None:
    """Показать детали задачи."""
    store = _store()
    try:
        print_task_detail(store.board, task_id, console)
    except ContractViolation as e:
        raise _contract_error(e)


@app.command("reset")
def reset_cmd(
    yes: bool = typer.Option(False, "--yes", "-y", help="Не спрашивать подтверждение"),
) -> None:
    """Сбросить доску к состоянию по умолчанию."""
    if not yes and not typer.confirm("Replace the whole board with the default one?"):
        raise typer.Exit(1)
    cfg = load_config()
    store = open_store(cfg)
    _report(store.reset(default_board(cfg.board_prefix, cfg.board_title)))


# ==============================================================================
# Config & Web
# ==============================================================================

@app.command("config")
def config_cmd(
    data_dir: Optional[str] = typer.Option(None, "--data-dir", help="Каталог хранения доски"),
    storage_key: Optional[str] = typer.Option(None, "--key", help="Ключ хранилища"),
    prefix: Optional[str] = typer.Option(None, "--prefix", help="Префикс ключей задач для новой доски"),
    port: Optional[int] = typer.Option(None, "--port", help="Порт веб-сервера"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG/INFO/WARNING"),
) -> None:
    """Показать или изменить конфиг."""
    cfg = load_config()
    updates = {
        "data_dir": str(Path(data_dir).expanduser()) if data_dir else None,
        "storage_key": storage_key,
        "board_prefix": prefix,
        "web_port": port,
        "log_level": log_level,
    }
    updates = {k: v for k, v in updates.items() if v is not None}

    if updates:
        cfg = AppConfig(**{**cfg.model_dump(), **updates})
        save_config(cfg)
        console.print(f"[green]Saved {config_path()}[/green]")

    table = Table(title="Config")
    table.add_column("Key", style="bold")
    table.add_column("Value")
    for key, value in cfg.model_dump().items():
        table.add_row(key, str(value))
    console.print(table)


@app.command("web")
def web_cmd(
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Порт"),
    host: Optional[str] = typer.Option(None, "--host", help="Хост"),
) -> None:
    """Запустить веб-API доски."""
    from .web import run_server

    cfg = load_config()
    host = host or cfg.web_host
    port = port or cfg.web_port
    console.print(f"[green]Starting board API on http://{host}:{port}[/green]")
    run_server(open_store(cfg), host=host, port=port)


if __name__ == "__main__":
    app()
