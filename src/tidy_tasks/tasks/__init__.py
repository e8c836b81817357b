"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskSnapshot)
- task_store.py: in-memory authoritative collection + mutation/notify API
"""
