"""
Persistence.

Components:
- kv.py: key-value storage backends (in-memory, JSON files)
- persistence.py: PersistenceGateway (load/save of the whole collection)
"""
