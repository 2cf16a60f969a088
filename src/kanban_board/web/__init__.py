"""
Web module - FastAPI JSON API for the board.
"""

from .app import (
    create_app,
    run_server,
)

__all__ = [
    "create_app",
    "run_server",
]
