"""
Task subsystem.

Components:
- task_models.py: Task dataclass + shape validation
- task_store.py: tasks.json storage
- task_api.py: recency/tag filters, transcript building, short-description backfill
"""
