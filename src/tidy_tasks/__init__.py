# src/tidy_tasks/__init__.py

"""Single-user task list engine: store, persistence, edit session, animated deletion."""

__version__ = "0.1.0"
