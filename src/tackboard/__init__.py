"""tackboard - kanban board editing core."""

__version__ = "0.1.0"
