"""Kanban board with a pure reorder engine and versioned persistence."""

__version__ = "0.1.0"
